"""
Filter registry and the default dataset filter set.

Usage::

    from sm_query.registry import build_default_registry

    registry = build_default_registry()
    institution = registry.get("institution")

A registry is populated once at startup and frozen; both translators read
from the same instance, so registering a definition enables the filter on
the relational and the search backend at once.
"""

from __future__ import annotations

from collections.abc import Iterator

from .exceptions import FilterRegistrationError
from .filters import FilterDefinition
from .operators import MatchKind


class FilterRegistry:
    """Ordered mapping of filter name to :class:`FilterDefinition`."""

    def __init__(self) -> None:
        self._filters: dict[str, FilterDefinition] = {}
        self._frozen = False

    def register(self, definition: FilterDefinition) -> None:
        if self._frozen:
            raise FilterRegistrationError(
                f"Cannot register '{definition.name}': registry is frozen"
            )
        if definition.name in self._filters:
            raise FilterRegistrationError(
                f"Filter '{definition.name}' is already registered"
            )
        self._filters[definition.name] = definition

    def register_all(self, *definitions: FilterDefinition) -> None:
        for definition in definitions:
            self.register(definition)

    def freeze(self) -> FilterRegistry:
        """Make the registry read-only. Returns ``self`` for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> FilterDefinition | None:
        return self._filters.get(name)

    def all(self) -> tuple[FilterDefinition, ...]:
        return tuple(self._filters.values())

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._filters)

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __iter__(self) -> Iterator[FilterDefinition]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._filters)


def capitalize(value: str) -> str:
    """``"POSITIVE"`` -> ``"Positive"``; idempotent."""
    return value.capitalize()


DEFAULT_FILTERS: tuple[FilterDefinition, ...] = (
    FilterDefinition.from_dotted("institution", "Submitted_By.Institution"),
    FilterDefinition.from_dotted(
        "polarity", "MS_Analysis.Polarity", MatchKind.PHRASE, preprocess=capitalize
    ),
    FilterDefinition.from_dotted(
        "ionisationSource", "MS_Analysis.Ionisation_Source", MatchKind.PHRASE
    ),
    FilterDefinition.from_dotted("analyzerType", "MS_Analysis.Analyzer"),
    FilterDefinition.from_dotted("organism", "Sample_Information.Organism"),
    FilterDefinition.from_dotted("organismPart", "Sample_Information.Organism_Part"),
    FilterDefinition.from_dotted("condition", "Sample_Information.Condition"),
    FilterDefinition.from_dotted("maldiMatrix", "Sample_Preparation.MALDI_Matrix"),
)


def build_default_registry(*, freeze: bool = True) -> FilterRegistry:
    """Create a registry with the built-in dataset filters."""
    registry = FilterRegistry()
    registry.register_all(*DEFAULT_FILTERS)
    if freeze:
        registry.freeze()
    return registry


__all__ = [
    "DEFAULT_FILTERS",
    "FilterRegistry",
    "build_default_registry",
]
