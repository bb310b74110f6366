"""Tests for hit post-processing: score cutoff and consecutive de-duplication."""

from talentsearch.core.schemas import Hit
from talentsearch.pipeline.postprocess import MinScoreFilter, collapse_repeats, talent_ids


class TestMinScoreFilter:
    def test_drops_at_and_below_cutoff(self) -> None:
        hits = [Hit(talent_id=1, score=0.9), Hit(talent_id=2, score=0.5), Hit(talent_id=3, score=0.91)]
        assert [h.talent_id for h in MinScoreFilter(0.9)(hits)] == [3]

    def test_unscored_always_kept(self) -> None:
        hits = [Hit(talent_id=1), Hit(talent_id=2, score=0.1), Hit(talent_id=3)]
        assert [h.talent_id for h in MinScoreFilter(0.9)(hits)] == [1, 3]

    def test_zero_score_dropped_even_with_zero_cutoff(self) -> None:
        assert MinScoreFilter(0.0)([Hit(talent_id=1, score=0.0)]) == []

    def test_empty(self) -> None:
        assert MinScoreFilter(0.9)([]) == []


class TestCollapseRepeats:
    def test_consecutive_only(self) -> None:
        assert collapse_repeats([4, 4, 5, 2, 2, 2, 4]) == [4, 5, 2, 4]

    def test_order_preserved(self) -> None:
        assert collapse_repeats([5, 1, 3]) == [5, 1, 3]

    def test_empty(self) -> None:
        assert collapse_repeats([]) == []


class TestTalentIds:
    def test_cutoff_then_dedup(self) -> None:
        hits = [
            Hit(talent_id=1, score=3.0),
            Hit(talent_id=2, score=0.2),
            Hit(talent_id=1, score=2.5),
            Hit(talent_id=5, score=1.0),
        ]
        # Dropping 2 makes the two 1s adjacent.
        assert talent_ids(hits, 0.9) == [1, 5]

    def test_sorted_hits(self) -> None:
        hits = [Hit(talent_id=i) for i in (4, 5, 2, 1)]
        assert talent_ids(hits, 0.9) == [4, 5, 2, 1]
