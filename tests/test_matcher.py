"""
Tests for the customer matching engine.
"""

import pytest

from voice_ledger.models.customer import MatchStrategy
from voice_ledger.pipeline.matcher import (
    SIMILARITY_CEILING,
    CustomerMatcher,
    find_best_matches,
    levenshtein,
    match_partial_name,
    phonetic_match,
    score_name,
    similarity_score,
    soundex,
)

from conftest import make_customer


class TestLevenshtein:
    """Test edit distance."""

    @pytest.mark.parametrize("a,b,expected", [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("abc", "abc", 0),
        ("", "abc", 3),
        ("abc", "", 3),
    ])
    def test_distance(self, a, b, expected):
        assert levenshtein(a, b) == expected

    def test_symmetric(self):
        assert levenshtein("ramesh", "suresh") == levenshtein("suresh", "ramesh")


class TestSimilarityScore:
    """Test normalized similarity."""

    def test_identical_ignoring_case(self):
        assert similarity_score("Ramesh", "ramesh") == 1.0

    def test_empty_side_is_zero(self):
        assert similarity_score("", "john") == 0.0
        assert similarity_score("john", None) == 0.0

    def test_one_substitution(self):
        assert similarity_score("abc", "abd") == pytest.approx(1 - 1 / 3)


class TestSoundex:
    """Test the phonetic code."""

    def test_classic_pairs(self):
        assert soundex("Robert") == "R163"
        assert soundex("Rupert") == "R163"
        assert soundex("Ashcraft") == "A261"

    def test_short_names_are_padded(self):
        assert soundex("Lee") == "L000"

    def test_non_latin_has_no_code(self):
        assert soundex("जॉन") == ""
        assert soundex("") == ""
        assert soundex(None) == ""

    def test_phonetic_match_requires_a_code(self):
        """Two non-Latin names must not match just because both codes are empty."""
        assert phonetic_match("जॉन", "जान") is False
        assert phonetic_match("Robert", "Rupert") is True


class TestPartialName:
    """Test word-level partial matching."""

    def test_word_prefix(self):
        assert match_partial_name("ram", "Ramesh Kumar") is True

    def test_close_word_pair(self):
        assert match_partial_name("kumaar", "Ramesh Kumar") is True

    def test_similarity_must_exceed_threshold(self):
        """kumr/kumar is exactly 0.8, which is not enough."""
        assert match_partial_name("kumr", "Ramesh Kumar") is False

    def test_empty_inputs(self):
        assert match_partial_name("", "Ramesh") is False
        assert match_partial_name("ramesh", "") is False


class TestScoreName:
    """Test rule tiers."""

    def test_exact(self):
        assert score_name("john smith", "John Smith") == (1.0, MatchStrategy.EXACT)

    def test_substring(self):
        assert score_name("ramesh", "Ramesh Kumar") == (0.85, MatchStrategy.SUBSTRING)

    def test_phonetic(self):
        assert score_name("rupert", "Robert") == (0.75, MatchStrategy.PHONETIC)

    def test_partial(self):
        assert score_name("sharma priyanka", "Priya Sharma") == (0.70, MatchStrategy.PARTIAL)

    def test_similarity_is_capped_below_partial(self):
        score, strategy = score_name("abcd efgh", "abcx efgx")

        assert strategy == MatchStrategy.SIMILARITY
        assert score == SIMILARITY_CEILING

    def test_unrelated_name_scores_low(self):
        score, strategy = score_name("xyz", "John Smith")

        assert strategy == MatchStrategy.SIMILARITY
        assert score < 0.3

    def test_empty_spoken_name(self):
        assert score_name("", "John Smith") == (0.0, MatchStrategy.SIMILARITY)
        assert score_name("   ", "John Smith") == (0.0, MatchStrategy.SIMILARITY)

    def test_tiers_are_strictly_ordered(self):
        """A stronger rule always outscores a weaker one."""
        names = ["Ramesh", "Ramesh Kumar", "Ramish", "Raamesh Patel", "Suresh"]
        scored = [score_name("ramesh", name) for name in names]

        assert [strategy for _, strategy in scored] == [
            MatchStrategy.EXACT,
            MatchStrategy.SUBSTRING,
            MatchStrategy.PHONETIC,
            MatchStrategy.PARTIAL,
            MatchStrategy.SIMILARITY,
        ]
        scores = [score for score, _ in scored]
        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == len(scores)


class TestFindBestMatches:
    """Test scoring plus threshold ranking over a snapshot."""

    def test_ambiguous_first_name(self, customers):
        ranked = find_best_matches("ramesh", customers)

        assert [c.customer.id for c in ranked.candidates] == ['c1', 'c2']
        assert all(c.score == 0.85 for c in ranked.candidates)
        assert ranked.is_ambiguous is True

    def test_ties_keep_snapshot_order(self):
        snapshot = [
            make_customer('b', 'Ramesh Singh'),
            make_customer('a', 'Ramesh Kumar'),
        ]
        ranked = find_best_matches("ramesh", snapshot)
        assert [c.customer.id for c in ranked.candidates] == ['b', 'a']

    def test_misspelled_full_name_resolves(self):
        ranked = find_best_matches("jon smith", [make_customer('c3', 'John Smith')])

        assert len(ranked) == 1
        assert ranked.best.score >= 0.6
        assert ranked.best.strategy == MatchStrategy.PHONETIC

    def test_devanagari_name_only_matches_itself(self, customers):
        ranked = find_best_matches("जॉन", customers)

        assert [c.customer.id for c in ranked.candidates] == ['c5']
        assert ranked.best.strategy == MatchStrategy.EXACT

    def test_results_are_thresholded_and_sorted(self, customers):
        ranked = find_best_matches("john", customers, threshold=0.0)

        scores = [c.score for c in ranked.candidates]
        assert len(scores) == len(customers)
        assert scores == sorted(scores, reverse=True)
        assert ranked.best.customer.id == 'c3'

    def test_empty_spoken_name_matches_nothing(self, customers):
        assert find_best_matches("", customers).is_empty is True

    def test_empty_snapshot(self):
        assert find_best_matches("john", []).is_empty is True


class TestCustomerMatcher:
    """Test the configured matcher wrapper."""

    def test_default_threshold(self):
        assert CustomerMatcher().min_score == 0.6

    def test_custom_threshold(self, customers):
        matcher = CustomerMatcher(min_score=0.9)
        ranked = matcher.match("ramesh", customers)

        assert ranked.threshold == 0.9
        assert ranked.is_empty is True
