"""
Voice Ledger

Turns multilingual spoken ledger commands ("Give 500 to John",
"जॉन से 500 मिले") into transaction intents, resolving the spoken customer
name against the ledger with layered fuzzy and phonetic matching.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    VoiceCommandResolver,
    ResolutionResult,
    ResolutionStatus,
    DisambiguationCoordinator,
    DisambiguationState,
    CustomerMatcher,
    extract_command,
    extract_command_with_fallback,
    extract_new_customer,
    find_best_matches,
    build_transaction_intent,
)
from .models import (
    VoiceTranscript,
    TransactionType,
    ParsedCommand,
    NewCustomerCommand,
    CustomerRecord,
    MatchStrategy,
    MatchCandidate,
    RankedMatchSet,
    TransactionIntent,
    ParseFailure,
    NoMatchFound,
    UserCancelled,
)
from .clients import InMemoryLedger, JsonFileLedger, RecordingSink
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    VoiceLedgerError,
    ConfigurationError,
    ResolutionError,
    InvalidTransitionError,
    UnknownCandidateError,
    LedgerError,
    LedgerReadError,
    TransactionSinkError,
)

__all__ = [
    # Version
    '__version__',
    # Resolver
    'VoiceCommandResolver',
    'ResolutionResult',
    'ResolutionStatus',
    # Components
    'DisambiguationCoordinator',
    'DisambiguationState',
    'CustomerMatcher',
    'extract_command',
    'extract_command_with_fallback',
    'extract_new_customer',
    'find_best_matches',
    'build_transaction_intent',
    # Models
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
    # Collaborators
    'InMemoryLedger',
    'JsonFileLedger',
    'RecordingSink',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'VoiceLedgerError',
    'ConfigurationError',
    'ResolutionError',
    'InvalidTransitionError',
    'UnknownCandidateError',
    'LedgerError',
    'LedgerReadError',
    'TransactionSinkError',
]
