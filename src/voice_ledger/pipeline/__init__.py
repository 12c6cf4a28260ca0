"""
Pipeline components: normalization, extraction, matching, ranking,
disambiguation and the end-to-end resolver.
"""

from .normalizer import normalize_digits, normalize_transcript
from .extractor import (
    extract_command,
    extract_command_with_fallback,
    extract_new_customer,
    extract_new_customer_with_fallback,
)
from .matcher import (
    CustomerMatcher,
    find_best_matches,
    levenshtein,
    match_partial_name,
    phonetic_match,
    score_customer,
    similarity_score,
    soundex,
)
from .ranking import DEFAULT_THRESHOLD, rank_candidates
from .disambiguation import (
    CoordinatorOutcome,
    DisambiguationCoordinator,
    DisambiguationSession,
    DisambiguationState,
    SelectionOption,
    transition,
)
from .intent_builder import build_transaction_intent
from .resolver import ResolutionResult, ResolutionStatus, VoiceCommandResolver

__all__ = [
    # Normalization
    'normalize_digits',
    'normalize_transcript',
    # Extraction
    'extract_command',
    'extract_command_with_fallback',
    'extract_new_customer',
    'extract_new_customer_with_fallback',
    # Matching
    'CustomerMatcher',
    'find_best_matches',
    'levenshtein',
    'match_partial_name',
    'phonetic_match',
    'score_customer',
    'similarity_score',
    'soundex',
    # Ranking
    'DEFAULT_THRESHOLD',
    'rank_candidates',
    # Disambiguation
    'CoordinatorOutcome',
    'DisambiguationCoordinator',
    'DisambiguationSession',
    'DisambiguationState',
    'SelectionOption',
    'transition',
    # Intent
    'build_transaction_intent',
    # Resolver
    'ResolutionResult',
    'ResolutionStatus',
    'VoiceCommandResolver',
]
