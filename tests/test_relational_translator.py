"""Tests for DatasetQueryTranslator and RelationalQuery rendering."""

from __future__ import annotations

import pytest

from sm_query.criteria import DatasetQueryCriteria, SortSpec
from sm_query.operators import SortDirection, SortField
from sm_query.relational.query import RelationalQuery, render_sql
from sm_query.relational.translator import DatasetQueryTranslator


@pytest.fixture
def translator(registry):
    return DatasetQueryTranslator(registry)


def test_filter_order_and_window(translator):
    criteria = DatasetQueryCriteria(
        dataset_filters={"institution": "Acme"},
        order=SortSpec(SortField.NAME, SortDirection.DESCENDING),
        offset=5,
        limit=20,
    )
    query = translator.translate(criteria)
    sql, params = query.render()

    assert "#>>" in sql
    assert "ORDER BY dataset.name DESC" in sql
    assert "LIMIT" in sql
    assert "OFFSET" in sql
    assert "Acme" in params.values()
    assert 5 in params.values()
    assert 20 in params.values()
    assert query.order == ("name", SortDirection.DESCENDING)
    assert (query.offset, query.limit) == (5, 20)


def test_order_applied_before_window_regardless_of_build_order():
    late_order = (
        RelationalQuery()
        .with_pagination(0, 10)
        .with_ordering("id", SortDirection.ASCENDING)
    )
    sql = late_order.render().sql
    assert sql.index("ORDER BY") < sql.index("LIMIT")


def test_exact_name_predicate_comes_first(translator):
    criteria = DatasetQueryCriteria(
        name_exact="run-7", dataset_filters={"organism": "Mouse"}
    )
    query = translator.translate_count(criteria)
    assert len(query.predicates) == 2
    first_sql, first_params = render_sql(query.predicates[0])
    assert "dataset.name =" in first_sql
    assert list(first_params.values()) == ["run-7"]


def test_missing_path_keeps_record(translator):
    query = translator.translate_count(
        DatasetQueryCriteria(dataset_filters={"polarity": "positive"})
    )
    sql, params = render_sql(query.predicates[0])
    assert "IS NULL OR" in sql
    assert "Positive" in params.values()


def test_unknown_filter_is_dropped(translator):
    with_unknown = translator.translate(
        DatasetQueryCriteria(dataset_filters={"institution": "Acme", "colour": "red"})
    )
    without = translator.translate(
        DatasetQueryCriteria(dataset_filters={"institution": "Acme"})
    )
    assert with_unknown.render() == without.render()


def test_count_ignores_order_and_window(translator):
    criteria = DatasetQueryCriteria(
        dataset_filters={"institution": "Acme"}, offset=5, limit=20
    )
    sql = translator.translate_count(criteria).count_statement()
    rendered = render_sql(sql).sql
    assert "count(*)" in rendered
    assert "ORDER BY" not in rendered
    assert "LIMIT" not in rendered


def test_default_relational_order_is_id_descending(translator):
    query = translator.translate(DatasetQueryCriteria())
    assert query.order == ("id", SortDirection.DESCENDING)
    assert "ORDER BY dataset.id DESC" in query.render().sql


def test_translation_is_deterministic(translator):
    def build():
        return DatasetQueryCriteria(
            name_exact="run-7",
            dataset_filters={"condition": "Tumor", "analyzerType": "Orbitrap"},
            order=SortSpec(SortField.NAME),
        )

    assert translator.translate(build()).render() == translator.translate(
        build()
    ).render()


def test_unknown_order_column_rejected():
    with pytest.raises(ValueError):
        RelationalQuery().with_ordering("mz", SortDirection.ASCENDING)


def test_suggestions_statement(translator):
    stmt = translator.translate_suggestions("Sample_Information.Organism", "mus")
    sql, params = render_sql(stmt)
    assert sql.startswith("SELECT DISTINCT")
    assert "LIKE" in sql
    assert "ORDER BY field ASC" in sql
    assert "mus" in params.values()


def test_suggestions_accept_path_sequence(translator):
    by_string = render_sql(translator.translate_suggestions("A.B", "x"))
    by_tuple = render_sql(translator.translate_suggestions(("A", "B"), "x"))
    assert by_string == by_tuple
