"""
Customer matching engine.

Scores every customer in the ledger snapshot against the spoken name
fragment. Rules are tried strongest first and the first applicable one
decides the score:

1. EXACT      case-insensitive equality                  1.00
2. SUBSTRING  spoken text inside the display name        0.85
3. PHONETIC   equal Soundex codes                        0.75
4. PARTIAL    word prefix or close word pair (> 0.8)     0.70
5. SIMILARITY normalized Levenshtein similarity          < 0.70

The fallback similarity is capped just under the PARTIAL tier so that a
weaker rule can never outscore a stronger one.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from ..models.customer import CustomerRecord, MatchCandidate, MatchStrategy, RankedMatchSet
from .ranking import DEFAULT_THRESHOLD, rank_candidates

SOUNDEX_CLASSES: Mapping[str, str] = MappingProxyType({
    'B': '1', 'F': '1', 'P': '1', 'V': '1',
    'C': '2', 'G': '2', 'J': '2', 'K': '2', 'Q': '2', 'S': '2', 'X': '2', 'Z': '2',
    'D': '3', 'T': '3',
    'L': '4',
    'M': '5', 'N': '5',
    'R': '6',
})
SOUNDEX_LENGTH = 4

TIER_SCORES: Mapping[MatchStrategy, float] = MappingProxyType({
    MatchStrategy.EXACT: 1.0,
    MatchStrategy.SUBSTRING: 0.85,
    MatchStrategy.PHONETIC: 0.75,
    MatchStrategy.PARTIAL: 0.70,
})
SIMILARITY_CEILING = 0.69
PARTIAL_WORD_SIMILARITY = 0.8


def levenshtein(a: str, b: str) -> int:
    """Edit distance over code points; insert, delete and substitute cost 1."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def similarity_score(a: str | None, b: str | None) -> float:
    """1 - distance / longer length, case-insensitive; 0.0 if either is empty."""
    if not a or not b:
        return 0.0
    a, b = a.lower(), b.lower()
    return 1.0 - levenshtein(a, b) / max(len(a), len(b))


def soundex(value: str | None, classes: Mapping[str, str] = SOUNDEX_CLASSES) -> str:
    """
    Four-character Soundex code ("Robert" -> "R163").

    Non A-Z characters are dropped first, so names in other scripts
    encode to an empty string.
    """
    letters = [ch for ch in (value or '').upper() if 'A' <= ch <= 'Z']
    if not letters:
        return ''

    code = letters[0]
    for ch in letters[1:]:
        digit = classes.get(ch)
        if digit and code[-1] != digit:
            code += digit
    return (code + '0' * SOUNDEX_LENGTH)[:SOUNDEX_LENGTH]


def phonetic_match(a: str | None, b: str | None) -> bool:
    """True when both strings have the same, non-empty Soundex code."""
    code_a = soundex(a)
    return bool(code_a) and code_a == soundex(b)


def match_partial_name(spoken: str | None, full_name: str | None) -> bool:
    """Any name word starts with a spoken word, or a word pair is > 0.8 similar."""
    if not spoken or not full_name:
        return False

    spoken_words = spoken.lower().split()
    name_words = full_name.lower().split()
    for s in spoken_words:
        for n in name_words:
            if n.startswith(s) or similarity_score(s, n) > PARTIAL_WORD_SIMILARITY:
                return True
    return False


def score_name(spoken: str, display_name: str) -> tuple[float, MatchStrategy]:
    """Score one display name against the spoken fragment."""
    spoken_key = (spoken or '').strip().lower()
    name_key = (display_name or '').strip().lower()
    if not spoken_key or not name_key:
        return 0.0, MatchStrategy.SIMILARITY

    if spoken_key == name_key:
        return TIER_SCORES[MatchStrategy.EXACT], MatchStrategy.EXACT
    if spoken_key in name_key:
        return TIER_SCORES[MatchStrategy.SUBSTRING], MatchStrategy.SUBSTRING
    if phonetic_match(spoken_key, name_key):
        return TIER_SCORES[MatchStrategy.PHONETIC], MatchStrategy.PHONETIC
    if match_partial_name(spoken_key, name_key):
        return TIER_SCORES[MatchStrategy.PARTIAL], MatchStrategy.PARTIAL

    fuzzy = min(similarity_score(spoken_key, name_key), SIMILARITY_CEILING)
    return fuzzy, MatchStrategy.SIMILARITY


def score_customer(spoken: str, customer: CustomerRecord) -> MatchCandidate:
    score, strategy = score_name(spoken, customer.display_name)
    return MatchCandidate(customer=customer, score=score, strategy=strategy)


def score_customers(spoken: str, customers: Iterable[CustomerRecord]) -> list[MatchCandidate]:
    """One candidate per customer, in snapshot order."""
    return [score_customer(spoken, customer) for customer in customers]


def find_best_matches(
    spoken: str,
    customers: Sequence[CustomerRecord],
    threshold: float = DEFAULT_THRESHOLD,
) -> RankedMatchSet:
    """Score every customer and keep those at or above ``threshold``, best first."""
    return rank_candidates(score_customers(spoken, customers), threshold, spoken_name=spoken)


class CustomerMatcher:
    """
    Matches a spoken name fragment against a customer snapshot.

    Thin stateful wrapper so the resolver can carry a configured threshold.
    """

    MIN_MATCH_SCORE = DEFAULT_THRESHOLD

    def __init__(self, min_score: float | None = None):
        """
        Initialize the matcher.

        Args:
            min_score: Override default acceptance threshold
        """
        self.min_score = self.MIN_MATCH_SCORE if min_score is None else min_score

    def match(self, spoken: str, customers: Sequence[CustomerRecord]) -> RankedMatchSet:
        return find_best_matches(spoken, customers, self.min_score)
