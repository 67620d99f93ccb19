# meili-importer

A command-line tool that imports large datasets into a Meilisearch index. It sends the
documents in batches of a size you choose.

Files are read as streams and cut into batches. Each batch is gzip-compressed and sent to
the index's documents endpoint. A failed request is retried up to 20 times with
exponential backoff, starting at 0.1 s, with jitter. Once a batch is accepted, the tool
polls the enqueued task every half second until the task succeeds or fails. If documents
in a succeeded task failed, it prints a warning.

## Installation

```console
pip install .
```

## Usage

```console
meili-importer --url http://localhost:7700 --index movies --files movies.ndjson
```

You can give several files at once. The special path `-` reads from standard input. In
that case `--format` is needed, because there is no extension to detect the format from:

```console
cat movies.csv | meili-importer --url http://localhost:7700 --index movies \
    --files - --format csv --api-key placeholder
```

The command exits with status 0 on success. On error it prints `Error: ...` to standard
error and exits with status 1. Errors include a missing file, an unknown format, invalid
input data, or retries that ran out.

### Options

| Option | Meaning |
| --- | --- |
| `--url` | Base URL of the Meilisearch instance (required). |
| `--index` | Name of the index that receives the documents (required). |
| `--primary-key` | Field that uniquely identifies documents. It is sent as the `primaryKey` query parameter. |
| `--api-key` | API key. It is sent as `Authorization: Bearer <key>`. |
| `--files` | One or more files to send. `-` means standard input. |
| `--format` | `json`, `ndjson`, `jsonl` or `csv`, in any letter case. Overrides detection by file extension. |
| `--csv-delimiter` | Delimiter written into CSV batches, as a single character or a byte value such as `59` (default `,`). |
| `--batch-size` | Batch size, such as `20 MiB` (the default), `512KB` or `1000000`. `KB`/`MB`/... are powers of 1000 and `KiB`/`MiB`/... are powers of 1024. It must be greater than zero. |
| `--skip-batches` | Batches of a file are sent only if this number is greater than the estimated batch count (file size divided by batch size). Otherwise they are counted but not sent. |
| `--upload-operation` | `add-or-replace` (default, sent with POST) or `add-or-update` (sent with PUT). |

### Formats

* `.json`: the whole file is sent as a single payload. It must be valid UTF-8.
* `.ndjson` / `.jsonl`: a stream of JSON objects separated by optional whitespace. Each
  object is written in compact form. Objects in a batch follow each other directly, with
  nothing between them. A value that is not an object is an error. `NaN` and `Infinity`
  are errors too.
* `.csv`: input is always read as comma-delimited. Every batch starts with the header row,
  and blank rows are skipped. A row with a different number of fields from the header is
  an error. A new batch starts when the bytes already buffered plus the field count of the
  next row reach the batch size.

## Library use

The building blocks can also be used from Python:

* `meili_importer.mime.Mime`: the formats `JSON`, `NDJSON` and `CSV`.
  * `Mime.from_path(path)` detects the format from a file extension.
  * `Mime.parse(text)` parses a format name.
  * `content_type()` gives the HTTP content type.
* `meili_importer.sizes.parse_byte_size(text)` turns a size such as `"20 MiB"` into bytes.
* `meili_importer.csv_chunker.chunk_csv(stream, size, delimiter)` yields CSV batches as
  bytes.
* `meili_importer.ndjson_chunker.iter_json_objects(stream)` yields the objects of a JSON
  stream.
* `meili_importer.ndjson_chunker.chunk_ndjson(stream, size)` yields batches of those
  objects as bytes.
* `meili_importer.uploader`:
  * `UploadTarget` holds the URL, index, primary key, API key and `DocumentOperation`.
  * `send_batch(session, target, mime, data, log, sleep)` uploads one batch with a
    `requests.Session`.
  * `UploadError` is raised when every attempt failed.

## Limitations

* JSON files are not split: the whole file is one payload, whatever the batch size.
* CSV input with a delimiter other than a comma is not supported. `--csv-delimiter` only
  affects the batches that are sent.
* Task polling has no time limit. It keeps going until the task reports `succeeded` or
  `failed`.
* When standard input is used, the progress bar has no total.