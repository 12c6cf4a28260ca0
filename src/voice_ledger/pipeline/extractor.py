"""
Voice command extraction.

Turns a transcript into a structured command using the per-language
keyword and pattern tables in ``voice_ledger.lexicon``:

1. Normalize (lowercase, ASCII digits)
2. Detect direction: payment keywords first, then credit keywords
3. Take the first run of digits as the amount
4. Try the language's name patterns in order; first capture wins

Nothing in this module raises on user input. Missing pieces come back as
``None`` / ``UNKNOWN`` and the caller decides what to show.
"""

import re
import unicodedata

from ..lexicon import FALLBACK_LANGUAGE, LanguageProfile, canonical_language, get_profile
from ..lexicon.patterns import AFTER_MARKER
from ..logging import get_logger
from ..models.transcript import NewCustomerCommand, ParsedCommand, TransactionType
from .normalizer import normalize_transcript

logger = get_logger(__name__)

# ASCII only: \d would also accept digits the normalizer failed to map
_DIGIT_RUN = re.compile(r'[0-9]+')
_ZERO_WIDTH = '\u200c\u200d'

PHONE_NUMBER_LENGTH = 10


def detect_transaction_type(text: str, profile: LanguageProfile) -> TransactionType:
    """
    Classify direction by keyword containment.

    Payment keywords are checked before credit keywords, so a transcript
    containing both is a PAYMENT.
    """
    lowered = text.lower()
    if any(keyword in lowered for keyword in profile.payment_keywords):
        return TransactionType.PAYMENT
    if any(keyword in lowered for keyword in profile.credit_keywords):
        return TransactionType.CREDIT
    return TransactionType.UNKNOWN


def extract_amount(text: str) -> int | None:
    """First contiguous run of ASCII digits, or None (zero counts as none)."""
    match = _DIGIT_RUN.search(text)
    if not match:
        return None
    amount = int(match.group(0))
    return amount if amount > 0 else None


def _keyword_runs(words: list[str], stopwords: frozenset[str]) -> list[list[str]]:
    """Split ``words`` into runs separated by keyword words (keywords dropped)."""
    runs: list[list[str]] = [[]]
    for word in words:
        if word in stopwords:
            runs.append([])
        else:
            runs[-1].append(word)
    return [run for run in runs if run]


def extract_name(text: str, profile: LanguageProfile) -> str | None:
    """
    Spoken customer-name fragment captured by the first matching pattern.

    Captures may span several words ("to ramesh kumar"). They are cut at
    the language's own keywords, keeping the run next to the marker: the
    first run after a preposition, the last run before a particle.
    """
    for pattern in profile.name_patterns:
        match = pattern.search(text)
        if not match:
            continue
        words = [w.strip(_ZERO_WIDTH) for w in match.group(1).split()]
        runs = _keyword_runs([w for w in words if w], profile.stopwords)
        if not runs:
            continue
        run = runs[0] if AFTER_MARKER in pattern.groupindex else runs[-1]
        return ' '.join(run)
    return None


def extract_command(text: str | None, language_tag: str | None = FALLBACK_LANGUAGE) -> ParsedCommand:
    """
    Parse a transaction command ("Give 500 to John").

    Args:
        text: Raw transcript from the speech recognizer
        language_tag: Recognizer language tag; unknown tags use English

    Returns:
        ParsedCommand; check ``success`` before using its fields
    """
    language = canonical_language(language_tag)
    profile = get_profile(language)
    normalized = normalize_transcript(text)

    command = ParsedCommand(
        transaction_type=detect_transaction_type(normalized, profile),
        amount=extract_amount(normalized),
        name_token=extract_name(normalized, profile),
        original_text=text or '',
        language=language,
    )

    logger.debug(
        "command_parsed",
        parse_language=language,
        transaction_type=command.transaction_type.value,
        amount=command.amount,
        name_token=command.name_token,
        success=command.success,
    )
    return command


def extract_command_with_fallback(
    text: str | None,
    language_tag: str | None = FALLBACK_LANGUAGE,
) -> ParsedCommand:
    """
    Parse with the requested language, retrying with English on failure.

    Speakers often mix English into regional-language commands. The
    original parse is returned when neither attempt succeeds, so the
    usage example shown matches the user's language.
    """
    parsed = extract_command(text, language_tag)
    if parsed.success or parsed.language == FALLBACK_LANGUAGE:
        return parsed

    logger.info("command_parse_retry_english", failed_language=parsed.language)
    retried = extract_command(text, FALLBACK_LANGUAGE)
    return retried if retried.success else parsed


# =============================================================================
# Customer creation commands
# =============================================================================


def extract_phone_number(text: str) -> str | None:
    """
    Join every digit run and keep a ten-digit phone number.

    Recognizers split numbers into groups ("98765 43210"); longer runs keep
    the last ten digits (country code spoken first).
    """
    digits = ''.join(_DIGIT_RUN.findall(normalize_transcript(text)))
    if len(digits) == PHONE_NUMBER_LENGTH:
        return digits
    if len(digits) > PHONE_NUMBER_LENGTH:
        return digits[-PHONE_NUMBER_LENGTH:]
    return None


def _strip_punctuation(text: str) -> str:
    return ''.join(
        ' ' if unicodedata.category(ch)[0] in ('P', 'S') else ch
        for ch in text
    )


def capitalize_name(name: str) -> str:
    """Title-case each word: "ramesh kumar" -> "Ramesh Kumar"."""
    return ' '.join(word[:1].upper() + word[1:] for word in name.lower().split())


def _find_first(text: str, keywords: tuple[str, ...]) -> tuple[int, str] | None:
    for keyword in keywords:
        pos = text.find(keyword)
        if pos != -1:
            return pos, keyword
    return None


def extract_new_customer(
    text: str | None,
    language_tag: str | None = FALLBACK_LANGUAGE,
) -> NewCustomerCommand:
    """
    Parse an add-customer command ("Add customer John number 9876543210").

    The name is whatever sits between the customer keyword and the number
    keyword, minus digits and punctuation, keeping words of 2+ characters.
    """
    language = canonical_language(language_tag)
    profile = get_profile(language)
    normalized = normalize_transcript(text).strip()

    customer_name = None
    customer_kw = _find_first(normalized, profile.customer_keywords)
    if customer_kw is not None:
        start = customer_kw[0] + len(customer_kw[1])
        number_kw = _find_first(normalized, profile.number_keywords)
        end = number_kw[0] if number_kw is not None else len(normalized)
        name_part = _strip_punctuation(_DIGIT_RUN.sub(' ', normalized[start:end]))
        words = [w for w in name_part.split() if len(w) > 1]
        if words:
            customer_name = capitalize_name(' '.join(words))

    command = NewCustomerCommand(
        customer_name=customer_name,
        phone_number=extract_phone_number(normalized),
        original_text=text or '',
        language=language,
    )

    logger.debug(
        "customer_command_parsed",
        parse_language=language,
        customer_name=command.customer_name,
        has_phone=command.phone_number is not None,
        success=command.success,
    )
    return command


def extract_new_customer_with_fallback(
    text: str | None,
    language_tag: str | None = FALLBACK_LANGUAGE,
) -> NewCustomerCommand:
    """English retry wrapper for extract_new_customer."""
    parsed = extract_new_customer(text, language_tag)
    if parsed.success or parsed.language == FALLBACK_LANGUAGE:
        return parsed

    logger.info("customer_parse_retry_english", failed_language=parsed.language)
    retried = extract_new_customer(text, FALLBACK_LANGUAGE)
    return retried if retried.success else parsed
