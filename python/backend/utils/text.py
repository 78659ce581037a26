"""Free-text answer normalisation."""

from __future__ import annotations

_SINGLE_QUOTES = "‘’‚‛"
_DOUBLE_QUOTES = "“”„‟"

_TRANSLATION = str.maketrans(
    {
        **{ch: "'" for ch in _SINGLE_QUOTES},
        **{ch: '"' for ch in _DOUBLE_QUOTES},
        ".": None,
    }
)


def normalize_input(text: str | None) -> str:
    """Canonicalise a typed answer for comparison.

    Smart quotes become their ASCII counterparts, periods are dropped
    (``St. John's`` matches ``St John's``), then the result is trimmed
    and lower-cased.  Periods go before trimming so the function is
    idempotent.
    """
    if not text:
        return ""
    return text.translate(_TRANSLATION).strip().lower()
