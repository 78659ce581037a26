from backend.models.catalog import Catalog, CatalogError
from backend.models.entity import CapitalRank, Entity, Region, RegionKind, Settlement
from backend.models.question import (
    GameMode,
    GameStatus,
    Question,
    QuestionType,
    Verdict,
)

__all__ = [
    "CapitalRank",
    "Catalog",
    "CatalogError",
    "Entity",
    "GameMode",
    "GameStatus",
    "Question",
    "QuestionType",
    "Region",
    "RegionKind",
    "Settlement",
    "Verdict",
]
