"""Tests for criteria value objects and API argument parsing."""

from __future__ import annotations

import dataclasses

import pytest

from sm_query.criteria import (
    DEFAULT_LIMIT,
    AnnotationQueryCriteria,
    DatasetQueryCriteria,
    SortSpec,
    ValueRange,
)
from sm_query.exceptions import InvalidCriteria
from sm_query.operators import SortDirection, SortField

# -- ValueRange / SortSpec --------------------------------------------------


def test_value_range_accepts_numbers():
    rng = ValueRange(100, 200.5)
    assert (rng.min, rng.max) == (100, 200.5)


@pytest.mark.parametrize("bad", ["100", None, True, float("nan")])
def test_value_range_rejects_non_numbers(bad):
    with pytest.raises(InvalidCriteria) as exc_info:
        ValueRange(bad, 1, path="mz_range")
    assert exc_info.value.path == "mz_range.min"


def test_sort_spec_coerces_strings():
    spec = SortSpec("mz", "asc")
    assert spec.field is SortField.MZ
    assert spec.direction is SortDirection.ASCENDING


def test_sort_spec_rejects_unknown_field():
    with pytest.raises(InvalidCriteria) as exc_info:
        SortSpec("mass")
    assert exc_info.value.path == "order.field"


def test_sort_spec_from_args():
    spec = SortSpec.from_args("ORDER_BY_MZ", "ASCENDING", default=SortField.SCORE)
    assert spec == SortSpec(SortField.MZ, SortDirection.ASCENDING)
    default = SortSpec.from_args(None, None, default=SortField.ID)
    assert default == SortSpec(SortField.ID)


def test_sort_spec_from_args_suggests_enum_names():
    with pytest.raises(InvalidCriteria) as exc_info:
        SortSpec.from_args("ORDER_BY_MSN", None, default=SortField.SCORE)
    assert "ORDER_BY_MSM" in exc_info.value.suggestions


# -- AnnotationQueryCriteria ------------------------------------------------


def test_annotation_defaults():
    criteria = AnnotationQueryCriteria(database="HMDB")
    assert criteria.order == SortSpec(SortField.SCORE)
    assert criteria.offset == 0
    assert criteria.limit == DEFAULT_LIMIT
    assert dict(criteria.dataset_filters) == {}


def test_annotation_requires_database():
    with pytest.raises(InvalidCriteria) as exc_info:
        AnnotationQueryCriteria(database="")
    assert exc_info.value.path == "database"


def test_range_given_as_mapping():
    criteria = AnnotationQueryCriteria(database="HMDB", mz_range={"min": 1, "max": 2})
    assert criteria.mz_range == ValueRange(1, 2)


def test_range_mapping_needs_both_bounds():
    with pytest.raises(InvalidCriteria) as exc_info:
        AnnotationQueryCriteria(database="HMDB", mz_range={"min": 1})
    assert exc_info.value.path == "mz_range"


def test_negative_fdr_rejected():
    with pytest.raises(InvalidCriteria):
        AnnotationQueryCriteria(database="HMDB", fdr_threshold=-0.1)


@pytest.mark.parametrize(
    ("offset", "limit"), [(-1, 10), (0, 0), (0, -5), (True, 10), (0, 2.5)]
)
def test_bad_pagination_rejected(offset, limit):
    with pytest.raises(InvalidCriteria):
        AnnotationQueryCriteria(database="HMDB", offset=offset, limit=limit)


def test_wrong_string_field_type_rejected():
    with pytest.raises(InvalidCriteria) as exc_info:
        AnnotationQueryCriteria(database="HMDB", sum_formula=42)
    assert exc_info.value.path == "sum_formula"


def test_dataset_filters_are_read_only():
    source = {"organism": "Mouse"}
    criteria = AnnotationQueryCriteria(database="HMDB", dataset_filters=source)
    source["organism"] = "Human"
    assert criteria.dataset_filters["organism"] == "Mouse"
    with pytest.raises(TypeError):
        criteria.dataset_filters["organism"] = "Rat"


def test_criteria_are_immutable():
    criteria = AnnotationQueryCriteria(database="HMDB")
    with pytest.raises(dataclasses.FrozenInstanceError):
        criteria.limit = 50


def test_annotation_from_args():
    criteria = AnnotationQueryCriteria.from_args(
        {
            "filter": {
                "database": "HMDB",
                "datasetId": "ds1",
                "mzFilter": {"min": 100, "max": 200},
                "msmScoreFilter": {"min": 0.5, "max": 1.0},
                "fdrLevel": 0.1,
                "adduct": "",
                "compoundQuery": "glucose",
            },
            "datasetFilter": {"organism": "Mouse", "institution": ""},
            "orderBy": "ORDER_BY_FDR_MSM",
            "sortingOrder": "DESCENDING",
            "offset": 20,
            "limit": 50,
        }
    )
    assert criteria.database == "HMDB"
    assert criteria.dataset_id == "ds1"
    assert criteria.mz_range == ValueRange(100, 200)
    assert criteria.score_range == ValueRange(0.5, 1.0)
    assert criteria.fdr_threshold == 0.1
    assert criteria.adduct == ""
    assert criteria.compound_substring == "glucose"
    assert dict(criteria.dataset_filters) == {"organism": "Mouse"}
    assert criteria.order == SortSpec(
        SortField.FDR_THEN_SCORE, SortDirection.DESCENDING
    )
    assert (criteria.offset, criteria.limit) == (20, 50)


def test_annotation_from_args_treats_empty_fields_as_unset():
    criteria = AnnotationQueryCriteria.from_args(
        {
            "filter": {
                "database": "HMDB",
                "datasetId": "",
                "datasetName": "",
                "sumFormula": "",
                "compoundQuery": "",
                "fdrLevel": 0,
                "adduct": "",
            }
        }
    )
    assert criteria.dataset_id is None
    assert criteria.dataset_name is None
    assert criteria.sum_formula is None
    assert criteria.compound_substring is None
    assert criteria.fdr_threshold is None
    assert criteria.adduct == ""


def test_annotation_from_args_requires_database():
    with pytest.raises(InvalidCriteria) as exc_info:
        AnnotationQueryCriteria.from_args({"filter": {}})
    assert exc_info.value.path == "filter.database"


# -- DatasetQueryCriteria ---------------------------------------------------


def test_dataset_defaults():
    criteria = DatasetQueryCriteria()
    assert criteria.name_exact is None
    assert criteria.order == SortSpec(SortField.ID)
    assert (criteria.offset, criteria.limit) == (0, DEFAULT_LIMIT)


def test_dataset_from_args_splits_name_from_metadata_filters():
    criteria = DatasetQueryCriteria.from_args(
        {
            "filter": {"name": "run-7", "institution": "Acme", "polarity": None},
            "orderBy": "ORDER_BY_NAME",
            "offset": 5,
            "limit": 20,
        }
    )
    assert criteria.name_exact == "run-7"
    assert dict(criteria.dataset_filters) == {"institution": "Acme"}
    assert criteria.order == SortSpec(SortField.NAME)
    assert (criteria.offset, criteria.limit) == (5, 20)


def test_dataset_from_args_empty_name_is_unset():
    criteria = DatasetQueryCriteria.from_args({"filter": {"name": ""}})
    assert criteria.name_exact is None
