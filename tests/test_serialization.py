"""
Tests for serialization and deserialization of SQE documents.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `sqe.serialization`.
"""

import json

import pytest

from sqe.model import Document, Page, Insert, Diagnostic, UNTITLED
from sqe.examples import build_example_document
from sqe.serialization import (
    document_to_dict,
    document_from_dict,
    document_to_json,
    document_from_json,
    document_to_yaml,
    document_from_yaml,
    question_from_dict,
    entry_from_dict,
)


def build_sample_document() -> Document:
    doc = build_example_document()
    return Document(
        entries=doc.entries,
        diagnostics=(Diagnostic(line=4, message="unrecognized directive 'x' ignored"),),
        source="coffee.sqe",
    )


def test_json_roundtrip():
    doc = build_sample_document()
    restored = document_from_json(document_to_json(doc))
    assert restored == doc


def test_yaml_roundtrip():
    doc = build_sample_document()
    restored = document_from_yaml(document_to_yaml(doc))
    assert restored == doc


def test_dict_shape():
    d = document_to_dict(Document(entries=(Page("A", (Insert("hi"),)),)))
    assert d["entries"] == [{"type": "page", "title": "A", "content": [{"type": "insert", "text": "hi"}]}]
    assert d["diagnostics"] == []
    assert d["source"] is None


def test_json_is_sorted_and_unicode():
    text = document_to_json(Document(entries=(Page("Grüße"),)))
    assert "Grüße" in text
    assert list(json.loads(text).keys()) == ["diagnostics", "entries", "source"]


def test_unknown_question_type_rejected():
    with pytest.raises(TypeError):
        question_from_dict({"type": "slider"})


def test_dict_roundtrip_of_empty_document():
    assert document_from_dict(document_to_dict(Document())) == Document()


def test_page_without_title_is_untitled():
    page = entry_from_dict({"type": "page"})
    assert page == Page(title=UNTITLED, content=())
