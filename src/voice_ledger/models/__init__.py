"""
Data models for the voice ledger resolver.

Domain records are frozen pydantic models; UI-facing signals are frozen
dataclasses.
"""

from .transcript import VoiceTranscript, TransactionType, ParsedCommand, NewCustomerCommand
from .customer import CustomerRecord, MatchStrategy, MatchCandidate, RankedMatchSet
from .intent import TransactionIntent
from .outcomes import ParseFailure, NoMatchFound, UserCancelled, LedgerUnavailable

__all__ = [
    'VoiceTranscript',
    'TransactionType',
    'ParsedCommand',
    'NewCustomerCommand',
    'CustomerRecord',
    'MatchStrategy',
    'MatchCandidate',
    'RankedMatchSet',
    'TransactionIntent',
    'ParseFailure',
    'NoMatchFound',
    'UserCancelled',
    'LedgerUnavailable',
]
