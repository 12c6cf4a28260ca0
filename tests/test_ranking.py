"""
Tests for candidate ranking and threshold validation.
"""

import pytest

from voice_ledger.errors import ConfigurationError
from voice_ledger.models.customer import MatchCandidate, MatchStrategy
from voice_ledger.pipeline.ranking import DEFAULT_THRESHOLD, rank_candidates, validate_threshold

from conftest import make_customer


def candidate(customer_id: str, score: float) -> MatchCandidate:
    return MatchCandidate(
        customer=make_customer(customer_id, f'Customer {customer_id}'),
        score=score,
        strategy=MatchStrategy.SIMILARITY,
    )


class TestRankCandidates:
    """Test filtering and ordering."""

    def test_filters_below_threshold(self):
        ranked = rank_candidates(
            [candidate('a', 0.59), candidate('b', 0.6), candidate('c', 0.9)],
            spoken_name='x',
        )

        assert [c.customer.id for c in ranked.candidates] == ['c', 'b']
        assert ranked.threshold == DEFAULT_THRESHOLD
        assert ranked.spoken_name == 'x'

    def test_stable_on_ties(self):
        ranked = rank_candidates(
            [candidate('a', 0.7), candidate('b', 0.85), candidate('c', 0.7), candidate('d', 0.85)],
        )
        assert [c.customer.id for c in ranked.candidates] == ['b', 'd', 'a', 'c']

    def test_empty_input(self):
        ranked = rank_candidates([])

        assert ranked.is_empty is True
        assert ranked.best is None
        assert len(ranked) == 0

    def test_zero_threshold_keeps_everything(self):
        ranked = rank_candidates([candidate('a', 0.0), candidate('b', 0.1)], threshold=0.0)
        assert len(ranked) == 2

    def test_customers_accessor(self):
        ranked = rank_candidates([candidate('a', 0.9)])
        assert [c.id for c in ranked.customers] == ['a']
        assert ranked.is_ambiguous is False


class TestValidateThreshold:
    """Test threshold bounds."""

    @pytest.mark.parametrize("threshold", [0.0, 0.6, 1.0])
    def test_accepts_unit_interval(self, threshold):
        assert validate_threshold(threshold) == threshold

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_rejects_out_of_range(self, threshold):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_threshold(threshold)

        assert exc_info.value.context['threshold'] == threshold

    def test_rank_candidates_validates(self):
        with pytest.raises(ConfigurationError):
            rank_candidates([candidate('a', 0.9)], threshold=2.0)
