import io
import json

import pytest

from meili_importer.ndjson_chunker import chunk_ndjson, iter_json_objects


def test_iter_objects_lines_and_concatenation():
    text = '{"a": 1}\n{"b": "x"}{"c": [1, 2]}\n\n  {"d":\n {"e": null}}\n'
    assert list(iter_json_objects(io.StringIO(text))) == [
        {"a": 1},
        {"b": "x"},
        {"c": [1, 2]},
        {"d": {"e": None}},
    ]


def test_iter_objects_across_read_boundary():
    big = "x" * 200_000
    text = json.dumps({"big": big}) + "\n" + json.dumps({"id": 2})
    assert list(iter_json_objects(io.StringIO(text))) == [{"big": big}, {"id": 2}]


def test_iter_objects_empty_stream():
    assert list(iter_json_objects(io.StringIO("  \n"))) == []


def test_non_object_raises():
    with pytest.raises(ValueError, match="expected a JSON object"):
        list(iter_json_objects(io.StringIO("[1, 2]")))


def test_truncated_json_raises():
    with pytest.raises(ValueError):
        list(iter_json_objects(io.StringIO('{"a": 1}\n{"b": ')))


def test_nan_is_rejected():
    with pytest.raises(ValueError):
        list(iter_json_objects(io.StringIO('{"a": NaN}')))


def test_compact_serialization_in_one_chunk():
    chunks = list(chunk_ndjson(io.StringIO('{"a": 1}\n{"b": "x"}\n'), 1000))
    assert chunks == [b'{"a":1}{"b":"x"}']


def test_split_when_size_reached():
    chunks = list(chunk_ndjson(io.StringIO('{"a": 1}\n{"b": "x"}\n'), 8))
    assert chunks == [b'{"a":1}', b'{"b":"x"}']


def test_first_oversized_object_yields_empty_chunk():
    chunks = list(chunk_ndjson(io.StringIO('{"a": 1}'), 1))
    assert chunks == [b"", b'{"a":1}']


def test_key_order_and_unicode_preserved():
    chunks = list(chunk_ndjson(io.StringIO('{"z": "é", "a": 1}'), 1000))
    assert chunks[0].decode("utf-8") == '{"z":"é","a":1}'


def test_all_objects_kept_across_chunks():
    objects = [{"id": i, "title": f"movie {i}"} for i in range(100)]
    text = "\n".join(json.dumps(o) for o in objects)
    chunks = list(chunk_ndjson(io.StringIO(text), 100))
    assert len(chunks) > 1
    decoded = [obj for chunk in chunks for obj in iter_json_objects(io.StringIO(chunk.decode()))]
    assert decoded == objects