"""Import large datasets into Meilisearch in batches from JSON, NDJSON and CSV files."""

__version__ = "0.2.2"