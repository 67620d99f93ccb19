"""Splitting a stream of JSON objects into batches."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import TextIO

_READ_SIZE = 64 * 1024


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON number: {name}")


def iter_json_objects(stream: TextIO) -> Iterator[dict]:
    """Yield the JSON objects of a stream, separated by optional whitespace."""
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    buffer = ""
    eof = False
    while True:
        buffer = buffer.lstrip()
        if not buffer:
            if eof:
                return
            chunk = stream.read(_READ_SIZE)
            if chunk:
                buffer = chunk
            else:
                eof = True
            continue
        try:
            value, end = decoder.raw_decode(buffer)
        except json.JSONDecodeError:
            if eof:
                raise
            chunk = stream.read(_READ_SIZE)
            if chunk:
                buffer += chunk
            else:
                eof = True
            continue
        if not isinstance(value, dict):
            raise ValueError(f"expected a JSON object, found {type(value).__name__}")
        yield value
        buffer = buffer[end:]


def _serialize(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), allow_nan=False).encode("utf-8")


def chunk_ndjson(stream: TextIO, size: int) -> Iterator[bytes]:
    """Yield batches of compactly serialized objects, about ``size`` bytes each.

    The current batch is emitted as soon as adding the next object would make
    it reach ``size`` bytes; that object then starts the following batch.
    """
    buffer = bytearray()
    for obj in iter_json_objects(stream):
        encoded = _serialize(obj)
        if len(buffer) + len(encoded) >= size:
            yield bytes(buffer)
            buffer = bytearray(encoded)
        else:
            buffer += encoded
    if buffer:
        yield bytes(buffer)