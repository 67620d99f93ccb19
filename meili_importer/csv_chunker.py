"""Splitting a CSV stream into batches that each repeat the header."""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Iterator
from typing import TextIO


def _row_encoder(delimiter: str) -> Callable[[list[str]], bytes]:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n")

    def encode(row: list[str]) -> bytes:
        buffer.seek(0)
        buffer.truncate()
        writer.writerow(row)
        return buffer.getvalue().encode("utf-8", "surrogateescape")

    return encode


def chunk_csv(stream: TextIO, size: int, delimiter: str = ",") -> Iterator[bytes]:
    """Yield CSV batches of roughly ``size`` bytes, each starting with the header.

    The input is read with a comma delimiter; batches are written with
    ``delimiter``. A new batch starts once the bytes already buffered plus the
    number of fields of the next record reach ``size``.
    """
    reader = csv.reader(stream)
    headers = next(filter(None, reader), None)
    if headers is None:
        return

    encode = _row_encoder(delimiter)
    header_bytes = encode(headers)
    parts = [header_bytes]
    length = len(header_bytes)
    count = 0

    for row in reader:
        if not row:
            continue
        if len(row) != len(headers):
            raise ValueError(
                f"record on line {reader.line_num} has {len(row)} fields, "
                f"but the header has {len(headers)}"
            )
        row_bytes = encode(row)
        if length + len(row) >= size:
            yield b"".join(parts)
            parts = [header_bytes, row_bytes]
            length = len(header_bytes) + len(row_bytes)
            count = 1
        else:
            parts.append(row_bytes)
            length += len(row_bytes)
            count += 1

    if count:
        yield b"".join(parts)