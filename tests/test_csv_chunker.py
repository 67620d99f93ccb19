import csv
import io

import pytest

from meili_importer.csv_chunker import chunk_csv

DATA = "id,name\n1,a\n2,b\n"


def test_single_chunk_when_size_is_large():
    assert list(chunk_csv(io.StringIO(DATA), 1000)) == [DATA.encode()]


def test_splits_and_repeats_header():
    chunks = list(chunk_csv(io.StringIO(DATA), 12))
    assert chunks == [b"id,name\n1,a\n", b"id,name\n2,b\n"]


def test_tiny_size_yields_header_only_first_chunk():
    chunks = list(chunk_csv(io.StringIO(DATA), 1))
    assert chunks[0] == b"id,name\n"
    assert all(chunk.startswith(b"id,name\n") for chunk in chunks)


def test_output_uses_given_delimiter():
    chunks = list(chunk_csv(io.StringIO(DATA), 1000, ";"))
    assert chunks == [b"id;name\n1;a\n2;b\n"]


def test_empty_input_yields_nothing():
    assert list(chunk_csv(io.StringIO(""), 100)) == []


def test_header_only_input_yields_nothing():
    assert list(chunk_csv(io.StringIO("id,name\n"), 100)) == []


def test_blank_lines_are_skipped():
    chunks = list(chunk_csv(io.StringIO("id,name\n\n1,a\n\n"), 1000))
    assert chunks == [b"id,name\n1,a\n"]


def test_quoted_fields_round_trip():
    text = 'id,text\n1,"hello, world"\n2,"say ""hi"""\n3,"multi\nline"\n'
    rows = []
    for chunk in chunk_csv(io.StringIO(text, newline=""), 20):
        parsed = list(csv.reader(io.StringIO(chunk.decode(), newline="")))
        assert parsed[0] == ["id", "text"]
        rows.extend(parsed[1:])
    assert rows == list(csv.reader(io.StringIO(text, newline="")))[1:]


def test_all_records_kept_across_many_chunks():
    lines = [f"{i},name{i}" for i in range(200)]
    text = "id,name\n" + "\n".join(lines) + "\n"
    chunks = list(chunk_csv(io.StringIO(text), 64))
    assert len(chunks) > 1
    body = [line for chunk in chunks for line in chunk.decode().splitlines()[1:]]
    assert body == lines


def test_unequal_record_length_raises():
    with pytest.raises(ValueError, match="fields"):
        list(chunk_csv(io.StringIO("id,name\n1,a,extra\n"), 100))