[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meili-importer"
version = "0.2.2"
description = "Import large datasets into Meilisearch by sending them in batches"
requires-python = ">=3.10"
keywords = ["meilisearch", "import", "csv", "ndjson", "json", "batch", "search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Utilities",
]
dependencies = [
    "requests>=2.28",
    "tqdm>=4.64",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[project.scripts]
meili-importer = "meili_importer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["meili_importer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
