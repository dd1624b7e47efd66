"""
Language breakdown from per-repository byte counts.
"""

from typing import Iterable, Mapping

from github_wrapped.core.logger import get_logger

logger = get_logger(__name__)


def build_language_breakdown(byte_maps: Iterable[Mapping[str, int]]) -> dict[str, float]:
    """
    Sum bytes per language and convert them to percentages.

    Languages keep the order in which they were first seen, which is the
    tie-break order used by ``top_languages``.

    Args:
        byte_maps: One {language: bytes} mapping per repository, in listing order

    Returns:
        {language: percentage rounded to one decimal}

    Example:
        >>> build_language_breakdown([{"Python": 300}, {"Go": 100, "Python": 100}])
        {'Python': 80.0, 'Go': 20.0}
    """
    totals: dict[str, int] = {}
    for byte_map in byte_maps:
        for language, size in byte_map.items():
            totals[language] = totals.get(language, 0) + size

    grand_total = sum(totals.values())
    if grand_total <= 0:
        # Languages were reported but carry no bytes; keep the keys
        return {language: 0.0 for language in totals}

    return {
        language: round(size / grand_total * 100, 1)
        for language, size in totals.items()
    }


def top_languages(breakdown: Mapping[str, float], limit: int = 10) -> list[tuple[str, float]]:
    """Highest percentages first; ``sorted`` is stable so ties keep first-seen order."""
    ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]
