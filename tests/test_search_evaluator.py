"""Tests for in-memory clause evaluation."""

from __future__ import annotations

from sm_query.search.clauses import Missing, Or, Phrase, Range, Term, contains
from sm_query.search.evaluator import evaluate, evaluate_all, wildcard_to_regex

DOC = {
    "db_name": "HMDB",
    "mz": "00180.0634",
    "msm": 0.87,
    "fdr": 0.05,
    "sf": "C6H12O6",
    "comp_names": ["D-Glucose", "beta-D-Glucose"],
    "ds_meta": {"MS_Analysis": {"Polarity": "Positive"}},
}


def test_term():
    assert evaluate(Term("db_name", "HMDB"), DOC)
    assert not evaluate(Term("db_name", "ChEBI"), DOC)


def test_term_matches_any_list_element():
    assert evaluate(Term("comp_names", "D-Glucose"), DOC)


def test_range_is_half_open():
    assert evaluate(Range("mz", gte="00100.0000", lt="00200.0000"), DOC)
    assert not evaluate(Range("msm", gte=0.5, lt=0.87), DOC)
    assert evaluate(Range("msm", gte=0.87), DOC)


def test_wildcard():
    assert evaluate(contains("comp_names", "Gluc"), DOC)
    assert not evaluate(contains("comp_names", "Fruc"), DOC)


def test_wildcard_regex_handles_escapes():
    regex = wildcard_to_regex("*5\\**")
    assert regex.fullmatch("x5*y")
    assert not regex.fullmatch("x5y")


def test_phrase_is_token_based_and_case_insensitive():
    assert evaluate(Phrase("ds_meta.MS_Analysis.Polarity", "positive"), DOC)
    assert not evaluate(Phrase("ds_meta.MS_Analysis.Polarity", "posit"), DOC)


def test_missing_and_or():
    assert evaluate(Missing("adduct"), DOC)
    assert not evaluate(Missing("sf"), DOC)
    assert evaluate(Or(Term("sf", "nope"), Term("sf", "C6H12O6")), DOC)


def test_evaluate_all_is_conjunction():
    clauses = (Term("db_name", "HMDB"), Range("fdr", gte=0, lt=0.051))
    assert evaluate_all(clauses, DOC)
    assert not evaluate_all((*clauses, Term("sf", "C6H6")), DOC)
