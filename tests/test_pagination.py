"""Tests for Paginator on both query kinds."""

from __future__ import annotations

import pytest

from sm_query.exceptions import PaginationError
from sm_query.operators import SortDirection
from sm_query.pagination import Paginator
from sm_query.relational.query import RelationalQuery
from sm_query.search.query import SearchQuery


def test_paginates_sorted_search_query():
    query = SearchQuery().with_sort((("msm", "desc"),))
    paged = Paginator().apply(query, 20, 10)
    assert (paged.offset, paged.limit) == (20, 10)
    assert query.offset is None  # source query untouched


def test_paginates_sorted_relational_query():
    query = RelationalQuery().with_ordering("name", SortDirection.ASCENDING)
    paged = Paginator().apply(query, 0, 5)
    assert paged.is_paginated
    assert (paged.offset, paged.limit) == (0, 5)


@pytest.mark.parametrize("query", [SearchQuery(), RelationalQuery()])
def test_refuses_unsorted_query(query):
    with pytest.raises(PaginationError, match="unsorted"):
        Paginator().apply(query, 0, 10)


def test_refuses_double_pagination():
    query = SearchQuery().with_sort((("mz", "asc"),)).with_pagination(0, 10)
    with pytest.raises(PaginationError, match="already paginated"):
        Paginator().apply(query, 10, 10)
