"""
Ranking and threshold filtering of match candidates.
"""

from typing import Iterable

from ..errors import ConfigurationError
from ..models.customer import MatchCandidate, RankedMatchSet

DEFAULT_THRESHOLD = 0.6


def validate_threshold(threshold: float) -> float:
    if not 0.0 <= threshold <= 1.0:
        raise ConfigurationError(
            "Match threshold must be within [0, 1]",
            context={'threshold': threshold},
        )
    return threshold


def rank_candidates(
    candidates: Iterable[MatchCandidate],
    threshold: float = DEFAULT_THRESHOLD,
    spoken_name: str = '',
) -> RankedMatchSet:
    """
    Drop candidates below ``threshold`` and sort the rest by score.

    ``sorted`` is stable, so equal scores keep their snapshot order.
    """
    validate_threshold(threshold)
    kept = [c for c in candidates if c.score >= threshold]
    ranked = sorted(kept, key=lambda c: c.score, reverse=True)
    return RankedMatchSet(
        spoken_name=spoken_name,
        threshold=threshold,
        candidates=tuple(ranked),
    )
