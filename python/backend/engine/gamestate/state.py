"""Tracks the score and found-set of a session in progress."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field, replace

from backend.models.catalog import Catalog


@dataclass(frozen=True)
class Progress:
    """Score plus the display names already resolved this session.

    Values are immutable; recording an answer returns a new ``Progress``
    so names can never be un-found and the score never goes down.
    """

    found_names: frozenset[str] = field(default_factory=frozenset)
    score: int = 0

    def record_correct(self, name: str) -> Progress:
        return replace(self, found_names=self.found_names | {name}, score=self.score + 1)

    def record_incorrect(self) -> Progress:
        return self

    def is_found(self, name: str) -> bool:
        return name in self.found_names


def is_complete(found_names: Collection[str], catalog: Catalog) -> bool:
    """True once every entity name in *catalog* (both variants) has been found."""
    return catalog.all_names <= frozenset(found_names)
