"""
Language lexicon: keyword sets, name patterns and usage examples per language.
"""

from .profiles import (
    FALLBACK_LANGUAGE,
    PROFILES,
    LanguageProfile,
    canonical_language,
    get_profile,
    supported_languages,
    usage_example,
)

__all__ = [
    'FALLBACK_LANGUAGE',
    'PROFILES',
    'LanguageProfile',
    'canonical_language',
    'get_profile',
    'supported_languages',
    'usage_example',
]
