"""Command line entry point: import files into Meilisearch in batches."""

from __future__ import annotations

import argparse
import contextlib
import io
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

import requests
from tqdm import tqdm

from meili_importer.csv_chunker import chunk_csv
from meili_importer.mime import Mime
from meili_importer.ndjson_chunker import chunk_ndjson
from meili_importer.sizes import parse_byte_size
from meili_importer.uploader import DocumentOperation, UploadError, UploadTarget, send_batch

STDIN_PATH = "-"


class _ImportFailure(Exception):
    pass


def _format_arg(text: str) -> Mime:
    try:
        return Mime.parse(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _size_arg(text: str) -> int:
    try:
        return parse_byte_size(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _delimiter_arg(text: str) -> str:
    if text.isdigit():
        value = int(text)
        if value > 255:
            raise argparse.ArgumentTypeError(f"delimiter byte out of range: {text}")
        return chr(value)
    if len(text) == 1:
        return text
    raise argparse.ArgumentTypeError(f"invalid delimiter: {text!r}")


def _operation_arg(text: str) -> DocumentOperation:
    try:
        return DocumentOperation(text)
    except ValueError:
        choices = ", ".join(op.value for op in DocumentOperation)
        raise argparse.ArgumentTypeError(f"invalid operation {text!r} (choose from {choices})") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meilisearch-importer",
        description="A tool to import massive datasets into Meilisearch by sending them in batches.",
    )
    parser.add_argument("--url", required=True, help="The URL of your Meilisearch instance.")
    parser.add_argument("--index", required=True, help="The index to send documents to.")
    parser.add_argument("--primary-key", help="The field that uniquely identifies documents.")
    parser.add_argument("--api-key", help="An API key with the documents.add right.")
    parser.add_argument(
        "--csv-delimiter",
        type=_delimiter_arg,
        default=",",
        help="The delimiter of CSV batches, as a byte value or a single character.",
    )
    parser.add_argument(
        "--files",
        nargs="+",
        type=Path,
        default=[],
        help="Files to stream in batches; '-' reads standard input.",
    )
    parser.add_argument(
        "--format",
        type=_format_arg,
        help="The file format (json, ndjson, jsonl, csv); overrides auto-detection.",
    )
    parser.add_argument(
        "--batch-size",
        type=_size_arg,
        default="20 MiB",
        help="The size of the batches sent to Meilisearch.",
    )
    parser.add_argument("--skip-batches", type=int, help="The number of batches to skip.")
    parser.add_argument(
        "--upload-operation",
        metavar="OPERATION",
        type=_operation_arg,
        nargs="?",
        const=DocumentOperation.ADD_OR_REPLACE,
        default=DocumentOperation.ADD_OR_REPLACE,
        help="add-or-replace (default) or add-or-update.",
    )
    return parser


@contextlib.contextmanager
def _open_text(path: Path, errors: str) -> Iterator[TextIO]:
    if str(path) == STDIN_PATH:
        wrapper = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors=errors, newline="")
        try:
            yield wrapper
        finally:
            wrapper.detach()
    else:
        with open(path, encoding="utf-8", errors=errors, newline="") as handle:
            yield handle


def _read_json(path: Path) -> bytes:
    data = sys.stdin.buffer.read() if str(path) == STDIN_PATH else path.read_bytes()
    data.decode("utf-8")
    return data


def _import_file(session, target: UploadTarget, opts, path: Path) -> None:
    is_stdin = str(path) == STDIN_PATH
    if not is_stdin and not path.exists():
        raise _ImportFailure(f"The file {str(path)!r} does not exist")

    mime = opts.format or Mime.from_path(path)
    if mime is None:
        raise _ImportFailure("Could not find the mime type")

    size = opts.batch_size
    file_size = 0 if is_stdin else path.stat().st_size
    nb_chunks = file_size // size
    send = opts.skip_batches is None or opts.skip_batches > nb_chunks

    with tqdm(total=nb_chunks, unit="batch") as progress:
        def upload(chunk: bytes) -> None:
            if send:
                send_batch(session, target, mime, chunk, tqdm.write)
            progress.update(1)

        if mime is Mime.JSON:
            upload(_read_json(path))
        elif mime is Mime.NDJSON:
            with _open_text(path, "strict") as stream:
                for chunk in chunk_ndjson(stream, size):
                    upload(chunk)
        else:
            with _open_text(path, "surrogateescape") as stream:
                for chunk in chunk_csv(stream, size, opts.csv_delimiter):
                    upload(chunk)


def main(argv=None) -> int:
    parser = build_parser()
    opts = parser.parse_args(argv)
    if opts.batch_size <= 0:
        parser.error("--batch-size must be greater than zero")

    target = UploadTarget(
        url=opts.url,
        index=opts.index,
        primary_key=opts.primary_key,
        api_key=opts.api_key,
        operation=opts.upload_operation,
    )
    try:
        with requests.Session() as session:
            for path in opts.files:
                _import_file(session, target, opts, path)
    except (_ImportFailure, UploadError, OSError, ValueError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())