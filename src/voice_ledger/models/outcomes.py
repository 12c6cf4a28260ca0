"""
Failure and cancellation signals surfaced to the UI layer.

None of these are exceptions: each is a recoverable, local condition that
the UI displays (or silently drops, for UserCancelled).
"""

from dataclasses import dataclass

from .transcript import ParsedCommand


@dataclass(frozen=True)
class ParseFailure:
    """Transcript lacked a direction, amount or name."""

    original_text: str
    language: str
    usage_example: str
    missing_fields: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f'{self.usage_example}\n\nYou said: "{self.original_text}"'


@dataclass(frozen=True)
class NoMatchFound:
    """No customer scored at or above the acceptance threshold."""

    spoken_name: str

    @property
    def message(self) -> str:
        return (
            f'No customer "{self.spoken_name}" found in your contacts.\n\n'
            'Please add them manually first, then try voice input again.'
        )


@dataclass(frozen=True)
class UserCancelled:
    """The user dismissed the customer selection list."""

    pending_command: ParsedCommand


@dataclass(frozen=True)
class LedgerUnavailable:
    """The customer snapshot could not be read."""

    reason: str
