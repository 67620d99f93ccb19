"""Document formats understood by the importer."""

from __future__ import annotations

import enum
from pathlib import PurePath


class Mime(enum.Enum):
    """A document format, valued by its HTTP content type."""

    JSON = "application/json"
    NDJSON = "application/x-ndjson"
    CSV = "text/csv"

    @classmethod
    def from_path(cls, path) -> Mime | None:
        """Guess the format from a file extension, or return None."""
        suffix = PurePath(path).suffix
        return _EXTENSIONS.get(suffix[1:]) if suffix else None

    @classmethod
    def parse(cls, text: str) -> Mime:
        """Parse a format name such as ``json``, ``ndjson``, ``jsonl`` or ``csv``."""
        lowered = text.lower()
        try:
            return _EXTENSIONS[lowered]
        except KeyError:
            raise ValueError(
                f"unknown {lowered} file format. "
                "Possible values are json, ndjson, jsonl, and csv."
            ) from None

    def content_type(self) -> str:
        """The value sent in the Content-Type header."""
        return self.value


_EXTENSIONS = {
    "json": Mime.JSON,
    "ndjson": Mime.NDJSON,
    "jsonl": Mime.NDJSON,
    "csv": Mime.CSV,
}