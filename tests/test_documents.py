"""Tests for metadata path resolution."""

from __future__ import annotations

from types import SimpleNamespace

from sm_query.documents import dataset_field, record_metadata, resolve_path


def test_resolve_nested_path(metadata):
    assert resolve_path(metadata, ("Submitted_By", "Institution")) == "Acme Labs"


def test_missing_step_yields_none(metadata):
    assert resolve_path(metadata, ("Submitted_By", "Nope")) is None
    assert resolve_path(metadata, ("Nope", "Institution")) is None


def test_non_mapping_step_yields_none():
    doc = {"MS_Analysis": "Positive"}
    assert resolve_path(doc, ("MS_Analysis", "Polarity")) is None


def test_none_document_yields_none():
    assert resolve_path(None, ("a",)) is None


def test_record_metadata_from_dict_and_object(metadata):
    assert record_metadata({"metadata": metadata}) is metadata
    assert record_metadata(SimpleNamespace(metadata_=metadata)) is metadata
    assert record_metadata(object()) is None


def test_dataset_field(registry, metadata):
    record = {"id": "ds1", "metadata": metadata}
    assert dataset_field(record, "organism", registry) == "Mus musculus (mouse)"
    assert dataset_field(record, "unknown", registry) is None
    assert dataset_field({"id": "ds2", "metadata": {}}, "organism", registry) is None
