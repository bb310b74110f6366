"""Post-processing of raw hits into an ordered list of talent ids.

Order (engine order is trusted, nothing is re-sorted):
  1. MinScoreFilter: drop scored hits at or below the cutoff
  2. collapse_repeats: drop consecutive duplicate ids
"""

import logging
from collections.abc import Iterable

from talentsearch.core.schemas import Hit

logger = logging.getLogger(__name__)


class MinScoreFilter:
    """Remove hits whose relevance score is present and ``<= min_score``.

    Unscored hits (pure filter matches, sorted by field) always pass.
    """

    def __init__(self, min_score: float) -> None:
        self._min_score = min_score

    def __call__(self, hits: list[Hit]) -> list[Hit]:
        result = [h for h in hits if h.score is None or h.score > self._min_score]
        dropped = len(hits) - len(result)
        if dropped:
            logger.debug("MinScoreFilter: dropped %d hits at or below %.2f", dropped, self._min_score)
        return result


def collapse_repeats(ids: Iterable[int]) -> list[int]:
    """Remove consecutive duplicates, keeping the first of each run."""
    result: list[int] = []
    for talent_id in ids:
        if not result or result[-1] != talent_id:
            result.append(talent_id)
    return result


def talent_ids(hits: list[Hit], min_score: float) -> list[int]:
    """Apply the score cutoff and return de-duplicated ids in engine order."""
    relevant = MinScoreFilter(min_score)(hits)
    return collapse_repeats(h.talent_id for h in relevant)
