"""
Custom exceptions for the voice ledger resolver.

Provides:
- Typed exception hierarchy for configuration and programming faults
- Error context preservation for debugging
- Wrapping of ledger and transaction-entry collaborator failures

User-facing conditions (unparseable transcript, unknown customer, dismissed
selection) are not exceptions; they travel as result signals, see
``voice_ledger.models.outcomes``.
"""

from typing import Any


class VoiceLedgerError(Exception):
    """Base exception for all voice ledger errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class ConfigurationError(VoiceLedgerError):
    """Invalid configuration value."""

    pass


# =============================================================================
# Resolution Errors
# =============================================================================


class ResolutionError(VoiceLedgerError):
    """Base class for customer resolution errors."""

    pass


class InvalidTransitionError(ResolutionError):
    """Event is not allowed in the coordinator's current state."""

    pass


class UnknownCandidateError(ResolutionError):
    """Selected customer is not one of the presented candidates."""

    pass


# =============================================================================
# Ledger Errors
# =============================================================================


class LedgerError(VoiceLedgerError):
    """Base class for ledger collaborator errors."""

    pass


class LedgerReadError(LedgerError):
    """Customer snapshot could not be read."""

    pass


def wrap_ledger_error(exc: Exception, context: dict[str, Any] | None = None) -> LedgerError:
    """
    Wrap a ledger collaborator exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        LedgerReadError carrying the original error details
    """
    if isinstance(exc, LedgerError):
        return exc

    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    return LedgerReadError(
        f"Customer ledger read failed: {exc}",
        context=ctx,
    )


# =============================================================================
# Transaction Sink Errors
# =============================================================================


class TransactionSinkError(VoiceLedgerError):
    """Transaction-entry collaborator rejected or failed to accept an intent."""

    pass


def wrap_sink_error(exc: Exception, context: dict[str, Any] | None = None) -> TransactionSinkError:
    """
    Wrap a transaction sink exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        TransactionSinkError carrying the original error details
    """
    if isinstance(exc, TransactionSinkError):
        return exc

    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    return TransactionSinkError(
        f"Transaction entry failed: {exc}",
        context=ctx,
    )
