"""
Name-capture pattern families.

Three shapes cover every supported language:

- preposition-led: the name follows a marker ("to Ramesh Kumar", "from John")
- postposition-led: the name precedes a detached particle ("रमेश कुमार को")
- suffix-led: the particle is glued to the name ("जॉनला", "ஜான்கு")

Each builder returns a compiled pattern with a single named group. The group
name tells the extractor which side of the capture is next to the marker:
``after`` captures read forward from a marker, ``before`` captures end at a
particle. Preposition- and postposition-led captures span several words; the
extractor trims them at language keywords.

Word boundaries are expressed with whitespace lookarounds because ``\\b``
misfires on Indic vowel signs, which are not word characters to ``re``.
"""

import re
from typing import Iterable

# A name character: anything but whitespace, digits and sentence punctuation.
NAME_CHAR = r"[^\s\d.,!?;:\"'()\[\]{}।॥؟،\-]"
NAME_WORD = rf"{NAME_CHAR}+"

AFTER_MARKER = 'after'
BEFORE_MARKER = 'before'

_BEFORE = r"(?:^|(?<=\s))"
_AFTER = r"(?=[\s.,!?;:।॥؟،]|$)"


def _alternation(words: Iterable[str]) -> str:
    # Longest first: "இடமிருந்து" must be tried before "இருந்து"
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    return '|'.join(re.escape(w) for w in ordered)


def preposition_led(markers: Iterable[str]) -> re.Pattern[str]:
    """Capture the run of words following one of ``markers``, up to a digit or punctuation."""
    return re.compile(
        rf"{_BEFORE}(?:{_alternation(markers)})\s+"
        rf"(?P<{AFTER_MARKER}>{NAME_WORD}(?:\s+{NAME_WORD})*)"
    )


def postposition_led(particles: Iterable[str]) -> re.Pattern[str]:
    """Capture the run of words preceding the first detached ``particles`` word."""
    return re.compile(
        rf"{_BEFORE}(?P<{BEFORE_MARKER}>(?:{NAME_WORD}\s+)*?{NAME_WORD})"
        rf"\s+(?:{_alternation(particles)}){_AFTER}"
    )


def suffix_led(suffixes: Iterable[str]) -> re.Pattern[str]:
    """Capture the stem of a token ending in one of ``suffixes`` (optionally hyphenated)."""
    return re.compile(
        rf"{_BEFORE}(?P<{BEFORE_MARKER}>{NAME_CHAR}+?)-?(?:{_alternation(suffixes)}){_AFTER}"
    )


# Shared families, tried after a language's own patterns
PREPOSITION_FAMILY = preposition_led(('to', 'from'))
HINDI_FAMILY = postposition_led(('से', 'को', 'ने'))
MARATHI_FAMILY = (
    postposition_led(('कडून', 'ला', 'ना')),
    suffix_led(('कडून', 'ला')),
)

SHARED_NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    PREPOSITION_FAMILY,
    HINDI_FAMILY,
    *MARATHI_FAMILY,
)


def with_shared_fallbacks(own: Iterable[re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    """Language patterns first, then any shared family not already listed."""
    patterns = list(own)
    seen = {p.pattern for p in patterns}
    for shared in SHARED_NAME_PATTERNS:
        if shared.pattern not in seen:
            patterns.append(shared)
            seen.add(shared.pattern)
    return tuple(patterns)
