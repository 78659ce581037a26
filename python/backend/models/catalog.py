"""Read-only entity catalog and the loaders that build it.

Settlements come from a JSON list of city records.  Regions come from a
boundary dataset — either a GeoJSON ``FeatureCollection`` or a TopoJSON
``Topology`` — of which only the feature properties are read; geometry is
ignored.

A malformed record never fails the whole load: missing fields fall back to
the best available alternative (or a placeholder name) and the problem is
logged.  Only structural problems (unreadable file, bad JSON, wrong
top-level shape) raise :class:`CatalogError`.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from backend.models.entity import (
    CapitalRank,
    Entity,
    Region,
    RegionKind,
    Settlement,
)
from backend.models.question import QuestionType

logger = logging.getLogger("geo-quiz.catalog")

# Statistics Canada codes (letters and PRUID) for the three territories.
_TERRITORY_CODES = frozenset({"YT", "NT", "NU", "60", "61", "62"})


class CatalogError(ValueError):
    """Raised when a data file cannot be turned into a catalog at all."""


@dataclass(frozen=True)
class Catalog:
    """Immutable collection of every quiz entity, split by variant."""

    regions: tuple[Region, ...] = ()
    settlements: tuple[Settlement, ...] = ()

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_entities(
        cls,
        regions: Iterable[Region] = (),
        settlements: Iterable[Settlement] = (),
    ) -> Catalog:
        """Build a catalog, dropping records whose name repeats in a variant."""
        return cls(
            regions=tuple(_unique_by_name(regions, "region")),
            settlements=tuple(_unique_by_name(settlements, "settlement")),
        )

    @classmethod
    def load(
        cls,
        cities_path: Path | None = None,
        regions_path: Path | None = None,
    ) -> Catalog:
        """Load a catalog from a city list and a boundary dataset.

        Either path may be omitted, yielding an empty variant.
        """
        settlements = parse_settlements(_read_json(cities_path)) if cities_path else []
        regions = parse_regions(_read_json(regions_path)) if regions_path else []
        catalog = cls.from_entities(regions, settlements)
        logger.info(
            "Loaded catalog: %d regions, %d settlements",
            len(catalog.regions),
            len(catalog.settlements),
        )
        return catalog

    # -- queries --------------------------------------------------------------

    def entities_of(self, question_type: QuestionType) -> tuple[Entity, ...]:
        if question_type is QuestionType.REGION:
            return self.regions
        return self.settlements

    def names_of(self, question_type: QuestionType) -> list[str]:
        return [e.name for e in self.entities_of(question_type)]

    @property
    def all_names(self) -> frozenset[str]:
        return frozenset(e.name for e in (*self.regions, *self.settlements))

    @property
    def is_empty(self) -> bool:
        return not self.regions and not self.settlements

    def find_region(self, key: str) -> Region | None:
        """Look up a region by code (case-insensitive) or exact name."""
        wanted = key.strip()
        for region in self.regions:
            if region.id.casefold() == wanted.casefold() or region.name == wanted:
                return region
        return None

    def find_settlement(self, name: str) -> Settlement | None:
        for settlement in self.settlements:
            if settlement.name == name:
                return settlement
        return None

    def summary(self) -> dict[str, int]:
        """Return entity counts per variant and kind."""
        counts = {
            "regions": len(self.regions),
            "provinces": sum(r.kind is RegionKind.PROVINCE for r in self.regions),
            "territories": sum(r.kind is RegionKind.TERRITORY for r in self.regions),
            "settlements": len(self.settlements),
            "capitals": sum(s.is_capital for s in self.settlements),
        }
        return counts


# -- parsing ------------------------------------------------------------------


def parse_settlements(records: Any) -> list[Settlement]:
    """Turn a list of city records into ``Settlement`` values.

    Accepts both the census-style keys (``Name``, ``Prov_Ter``,
    ``Latitude`` …) and the lower-case keys used in hand-written fixtures
    (``name``, ``provinceId``, ``lat`` …).
    """
    if not isinstance(records, list):
        raise CatalogError(
            f"Expected a list of city records, got {type(records).__name__}."
        )

    settlements: list[Settlement] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping city record %d: not an object", index)
            continue
        name = _first_str(record, "Name", "name")
        if not name:
            name = f"Unknown settlement {index + 1}"
            logger.warning("City record %d has no name; using %r", index, name)
        settlements.append(
            Settlement(
                name=name,
                region_id=_first_str(record, "Prov_Ter", "provinceId", "region_id"),
                latitude=_number(record, "Latitude", "lat"),
                longitude=_number(record, "Longitude", "lng"),
                capital=_capital_rank(record),
                population=int(_number(record, "Population", "population")),
            )
        )
    return settlements


def parse_regions(data: Any) -> list[Region]:
    """Extract ``Region`` values from a GeoJSON or TopoJSON document."""
    regions: list[Region] = []
    for index, props in enumerate(_feature_properties(data)):
        name = _first_str(props, "name", "PRENAME")
        if not name:
            name = f"Unknown region {index + 1}"
            logger.warning("Boundary feature %d has no name; using %r", index, name)
        region_id = _first_str(props, "id", "PRUID") or name
        regions.append(Region(id=region_id, name=name, kind=_region_kind(props, region_id)))
    return regions


# -- helpers ------------------------------------------------------------------


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in {path}: {exc.msg} (line {exc.lineno})") from exc


def _feature_properties(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, dict):
        raise CatalogError("Boundary data must be a GeoJSON or TopoJSON object.")

    kind = data.get("type")
    if kind == "FeatureCollection":
        items = data.get("features") or []
    elif kind == "Topology":
        objects = data.get("objects") or {}
        if not objects:
            raise CatalogError("Invalid TopoJSON: no objects found.")
        # The first object group holds the boundaries.
        first = next(iter(objects.values()))
        items = (first.get("geometries") or []) if isinstance(first, dict) else []
    else:
        raise CatalogError(f"Unsupported boundary data type: {kind!r}.")

    props: list[dict[str, Any]] = []
    for item in items:
        raw = item.get("properties") if isinstance(item, dict) else None
        props.append(raw if isinstance(raw, dict) else {})
    return props


def _unique_by_name(entities: Iterable[Entity], label: str) -> list[Entity]:
    seen: set[str] = set()
    unique: list[Entity] = []
    for entity in entities:
        if entity.name in seen:
            logger.warning("Dropping duplicate %s %r", label, entity.name)
            continue
        seen.add(entity.name)
        unique.append(entity)
    return unique


def _first_str(record: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def _number(record: dict[str, Any], *keys: str) -> float:
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric %s=%r", key, value)
            continue
        if not math.isfinite(number):
            logger.warning("Ignoring non-finite %s=%r", key, value)
            continue
        return number
    return 0.0


def _capital_rank(record: dict[str, Any]) -> CapitalRank | None:
    raw = record.get("Capital")
    if raw:
        try:
            return CapitalRank(str(raw).strip().lower())
        except ValueError:
            logger.warning("Unknown capital rank %r for %r", raw, record.get("Name"))
            return None
    if record.get("isCapital"):
        return CapitalRank.PROVINCIAL
    return None


def _region_kind(props: dict[str, Any], region_id: str) -> RegionKind:
    declared = _first_str(props, "type", "kind").lower()
    if declared in ("province", "territory"):
        return RegionKind(declared)
    if region_id.upper() in _TERRITORY_CODES:
        return RegionKind.TERRITORY
    return RegionKind.PROVINCE
