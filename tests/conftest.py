"""Shared fixtures for query-layer tests."""

from __future__ import annotations

import pytest

from sm_query.registry import build_default_registry


@pytest.fixture
def registry():
    """Frozen registry with the built-in dataset filters."""
    return build_default_registry()


@pytest.fixture
def metadata():
    """A complete dataset metadata document."""
    return {
        "Submitted_By": {"Institution": "Acme Labs"},
        "MS_Analysis": {
            "Polarity": "Positive",
            "Ionisation_Source": "MALDI",
            "Analyzer": "FTICR",
        },
        "Sample_Information": {
            "Organism": "Mus musculus (mouse)",
            "Organism_Part": "Brain",
            "Condition": "Wildtype",
        },
        "Sample_Preparation": {"MALDI_Matrix": "2,5-dihydroxybenzoic acid (DHB)"},
    }
