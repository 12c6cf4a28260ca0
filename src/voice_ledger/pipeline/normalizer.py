"""
Transcript normalization.

Lowercases text and maps every localized decimal digit glyph (Devanagari
०-९, Bengali ০-৯, Arabic-Indic ٠-٩, full-width ０-９, ...) to ASCII 0-9.
All other characters pass through unchanged.
"""

import unicodedata


def normalize_digits(text: str) -> str:
    """Replace non-ASCII decimal digits with their ASCII equivalents."""
    out = []
    for ch in text:
        if ch.isdecimal() and not ch.isascii():
            out.append(str(unicodedata.decimal(ch)))
        else:
            out.append(ch)
    return ''.join(out)


def normalize_transcript(text: str | None) -> str:
    """Canonical form used by every extractor. Never raises."""
    if not text:
        return ''
    return normalize_digits(text.lower())
