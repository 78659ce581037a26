"""Shared fixtures: small catalogs, a controllable clock, and a feedback spy."""

from __future__ import annotations

import random

import pytest

from backend.config import GameConfig
from backend.engine.gameplay import DeferredQueue, GamePlay
from backend.models.catalog import Catalog
from backend.models.entity import CapitalRank, Region, RegionKind, Settlement


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingFeedback:
    def __init__(self) -> None:
        self.events: list[str] = []

    def on_correct(self) -> None:
        self.events.append("correct")

    def on_incorrect(self) -> None:
        self.events.append("incorrect")

    def on_finished(self) -> None:
        self.events.append("finished")


# -- catalogs -----------------------------------------------------------------


@pytest.fixture
def two_regions() -> Catalog:
    return Catalog.from_entities(
        regions=[Region("ON", "Ontario"), Region("QC", "Quebec")],
    )


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_entities(
        regions=[
            Region("ON", "Ontario"),
            Region("QC", "Quebec"),
            Region("BC", "British Columbia"),
            Region("NS", "Nova Scotia"),
            Region("YT", "Yukon", RegionKind.TERRITORY),
        ],
        settlements=[
            Settlement("Ottawa", "ON", 45.42, -75.70, CapitalRank.FEDERAL),
            Settlement("Toronto", "ON", 43.65, -79.38, CapitalRank.PROVINCIAL),
            Settlement("Victoria", "BC", 48.43, -123.37, CapitalRank.PROVINCIAL),
            Settlement("St. John's", "NL", 47.56, -52.71, CapitalRank.PROVINCIAL),
            Settlement("Whitehorse", "YT", 60.72, -135.06, CapitalRank.TERRITORIAL),
        ],
    )


# -- controller ---------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def queue(clock: FakeClock) -> DeferredQueue:
    return DeferredQueue(clock=clock)


@pytest.fixture
def feedback() -> RecordingFeedback:
    return RecordingFeedback()


@pytest.fixture
def make_game(queue: DeferredQueue, feedback: RecordingFeedback):
    def _make(catalog: Catalog, seed: int = 7, **config) -> GamePlay:
        return GamePlay(
            catalog,
            config=GameConfig(**config),
            scheduler=queue,
            feedback=feedback,
            rng=random.Random(seed),
        )

    return _make


@pytest.fixture
def game(make_game, catalog: Catalog) -> GamePlay:
    return make_game(catalog)
