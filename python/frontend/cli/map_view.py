"""Text stand-in for the map, shared by the CLI frontends.

Regions are "clicked" by their code (``ON``), settlements by their row
number (``3``).  Names stay hidden until found so the list cannot give
the answer away.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.engine.gameplay import GamePlay
from backend.models.catalog import Catalog
from backend.models.entity import Entity, Region, Settlement

HIDDEN = "?" * 6


@dataclass
class MapRow:
    key: str
    label: str
    detail: str
    found: bool
    highlighted: bool
    selected: bool


def _detail(entity: Entity) -> str:
    match entity:
        case Region(kind=kind):
            return kind.value
        case Settlement(region_id=region_id, capital=capital):
            rank = f", {capital.value} capital" if capital else ""
            return f"city in {region_id or '?'}{rank}"
    return ""


def map_rows(game: GamePlay) -> list[MapRow]:
    rows: list[MapRow] = []
    keyed: list[tuple[str, Entity]] = [(r.id, r) for r in game.catalog.regions]
    keyed += [(str(i), s) for i, s in enumerate(game.catalog.settlements, 1)]

    for key, entity in keyed:
        found = entity.name in game.found_names
        rows.append(
            MapRow(
                key=key,
                label=entity.name if found else HIDDEN,
                detail=_detail(entity),
                found=found,
                highlighted=game.highlighted_id is not None
                and entity.id == game.highlighted_id,
                selected=game.active_recall_target == entity,
            )
        )
    return rows


def resolve_pick(catalog: Catalog, token: str) -> Entity | None:
    """Turn a typed map key into the entity it points at."""
    token = token.strip()
    if not token:
        return None
    if token.isdigit():
        index = int(token) - 1
        if 0 <= index < len(catalog.settlements):
            return catalog.settlements[index]
        return None
    return catalog.find_region(token)
