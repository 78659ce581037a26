"""Entity models for the geography quiz — regions and settlements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RegionKind(StrEnum):
    PROVINCE = "province"
    TERRITORY = "territory"


class CapitalRank(StrEnum):
    FEDERAL = "federal"
    PROVINCIAL = "provincial"
    TERRITORIAL = "territorial"


@dataclass(frozen=True)
class Region:
    """A province or territory, identified by a stable short code."""

    id: str
    name: str
    kind: RegionKind = RegionKind.PROVINCE


@dataclass(frozen=True)
class Settlement:
    """A city.  The display name doubles as its identifier."""

    name: str
    region_id: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    capital: CapitalRank | None = None
    population: int = 0

    @property
    def id(self) -> str:
        return self.name

    @property
    def is_capital(self) -> bool:
        return self.capital is not None


Entity = Region | Settlement
