"""
Voice command resolver: transcript in, transaction intent out.

Provides end-to-end processing for one voice command:
1. Parse the transcript (with optional English retry)
2. Read the customer snapshot once from the ledger
3. Score and rank customers against the spoken name
4. Auto-resolve, report no match, or open a customer selection
5. Hand the resolved intent to the transaction-entry collaborator

Selection events (``select`` / ``cancel``) are forwarded to the
disambiguation coordinator. Every call returns a ResolutionResult; user-level
failures are carried as signals, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Sequence
from uuid import uuid4

from ..clients.ledger import LedgerReader, TransactionSink
from ..config import config
from ..errors import wrap_ledger_error
from ..lexicon import usage_example
from ..logging import PipelineTimer, get_logger, logging_context
from ..models.customer import CustomerRecord, RankedMatchSet
from ..models.intent import TransactionIntent
from ..models.outcomes import LedgerUnavailable, NoMatchFound, ParseFailure, UserCancelled
from ..models.transcript import ParsedCommand, VoiceTranscript
from .disambiguation import (
    CoordinatorOutcome,
    DisambiguationCoordinator,
    DisambiguationState,
    SelectionOption,
)
from .extractor import extract_command, extract_command_with_fallback
from .matcher import CustomerMatcher
from .ranking import validate_threshold

logger = get_logger(__name__)


class ResolutionStatus(str, Enum):
    """Where a voice command ended up."""

    PARSE_FAILED = 'parse_failed'
    LEDGER_UNAVAILABLE = 'ledger_unavailable'
    NO_MATCH = 'no_match'
    AUTO_RESOLVED = 'auto_resolved'
    AWAITING_SELECTION = 'awaiting_selection'
    RESOLVED = 'resolved'
    CANCELLED = 'cancelled'
    REJECTED = 'rejected'
    SUBMIT_FAILED = 'submit_failed'


_STATE_STATUS = {
    DisambiguationState.NO_MATCH: ResolutionStatus.NO_MATCH,
    DisambiguationState.AUTO_RESOLVED: ResolutionStatus.AUTO_RESOLVED,
    DisambiguationState.AWAITING_SELECTION: ResolutionStatus.AWAITING_SELECTION,
    DisambiguationState.RESOLVED: ResolutionStatus.RESOLVED,
    DisambiguationState.CANCELLED: ResolutionStatus.CANCELLED,
}


@dataclass
class ResolutionResult:
    """Result of one resolver call."""

    session_id: str
    status: ResolutionStatus

    command: ParsedCommand | None = None
    ranked: RankedMatchSet | None = None
    intent: TransactionIntent | None = None
    options: list[SelectionOption] = field(default_factory=list)

    # Signals for the UI layer
    parse_failure: ParseFailure | None = None
    no_match: NoMatchFound | None = None
    cancelled: UserCancelled | None = None
    ledger_failure: LedgerUnavailable | None = None
    rejected_reason: str | None = None
    submit_error: str | None = None

    # Timing
    started_at: datetime = field(default_factory=datetime.now)
    processing_time_ms: int | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """True if an intent was produced."""
        return self.intent is not None

    @property
    def awaiting_selection(self) -> bool:
        return self.status == ResolutionStatus.AWAITING_SELECTION

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'session_id': self.session_id,
            'status': self.status.value,
            'transaction_type': self.command.transaction_type.value if self.command else None,
            'amount': self.command.amount if self.command else None,
            'name_token': self.command.name_token if self.command else None,
            'candidates': [
                {'customer_id': c.customer.id, 'score': c.score, 'strategy': c.strategy.value}
                for c in (self.ranked.candidates if self.ranked else ())
            ],
            'intent': self.intent.model_dump(mode='json') if self.intent else None,
            'options': [o.customer_id for o in self.options],
            'parse_failure': self.parse_failure.message if self.parse_failure else None,
            'no_match': self.no_match.message if self.no_match else None,
            'ledger_failure': self.ledger_failure.reason if self.ledger_failure else None,
            'rejected_reason': self.rejected_reason,
            'submit_error': self.submit_error,
            'processing_time_ms': self.processing_time_ms,
            'stage_timings': self.stage_timings,
            'success': self.success,
        }


class VoiceCommandResolver:
    """
    Resolves spoken transaction commands against the customer ledger.

    Orchestrates:
    - extract_command: transcript -> ParsedCommand
    - CustomerMatcher: layered fuzzy/phonetic scoring and ranking
    - DisambiguationCoordinator: auto-accept vs. user selection

    Usage:
        resolver = VoiceCommandResolver(ledger, sink)
        result = await resolver.handle_transcript("Give 500 to John", "en")
        if result.awaiting_selection:
            result = resolver.select(result.options[0].customer_id)
    """

    def __init__(
        self,
        ledger_reader: LedgerReader,
        transaction_sink: TransactionSink | None = None,
        min_score: float | None = None,
        english_retry: bool | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            ledger_reader: Source of the customer snapshot
            transaction_sink: Receives resolved intents (optional)
            min_score: Acceptance threshold (default: config.MIN_MATCH_SCORE)
            english_retry: Retry failed parses with English (default: config.ENGLISH_RETRY)

        Raises:
            ConfigurationError: If the threshold is outside [0, 1]
        """
        self.ledger = ledger_reader
        self.min_score = validate_threshold(config.MIN_MATCH_SCORE if min_score is None else min_score)
        self.english_retry = config.ENGLISH_RETRY if english_retry is None else english_retry

        self.matcher = CustomerMatcher(self.min_score)
        self.coordinator = DisambiguationCoordinator(sink=transaction_sink)
        self._session_id: str | None = None

    @property
    def session_id(self) -> str | None:
        """ID of the current (or most recent) voice command."""
        return self._session_id

    @property
    def awaiting_selection(self) -> bool:
        return self.coordinator.state == DisambiguationState.AWAITING_SELECTION

    def parse(self, text: str | None, language_tag: str | None = None) -> ParsedCommand:
        language_tag = language_tag or config.DEFAULT_LANGUAGE
        if self.english_retry:
            return extract_command_with_fallback(text, language_tag)
        return extract_command(text, language_tag)

    async def handle_transcript(
        self,
        transcript: VoiceTranscript | str,
        language_tag: str | None = None,
    ) -> ResolutionResult:
        """
        Process one recognized utterance through the full pipeline.

        Args:
            transcript: VoiceTranscript, or raw text with ``language_tag``
            language_tag: Language tag when ``transcript`` is a string

        Returns:
            ResolutionResult describing the outcome
        """
        if isinstance(transcript, VoiceTranscript):
            text, language_tag = transcript.text, transcript.language_tag
        else:
            text = transcript

        session_id = uuid4().hex[:12]
        timer = PipelineTimer()

        with logging_context(session_id=session_id, language=language_tag):
            if self.awaiting_selection:
                return self._selection_open(session_id, timer)

            self._session_id = session_id
            logger.info("voice_command_started", text_length=len(text or ''))

            with timer.stage("parse"):
                command = self.parse(text, language_tag)

            if not command.success:
                failure = ParseFailure(
                    original_text=command.original_text,
                    language=command.language,
                    usage_example=usage_example(command.language),
                    missing_fields=tuple(command.missing_fields),
                )
                logger.info("voice_command_unparsed", missing=command.missing_fields)
                return self._finish(
                    ResolutionResult(
                        session_id=session_id,
                        status=ResolutionStatus.PARSE_FAILED,
                        command=command,
                        parse_failure=failure,
                    ),
                    timer,
                )

            try:
                with timer.stage("ledger_read"):
                    customers = await self.ledger.fetch_customers()
            except Exception as exc:
                error = wrap_ledger_error(exc)
                logger.error("ledger_read_failed", error=str(error))
                return self._finish(
                    ResolutionResult(
                        session_id=session_id,
                        status=ResolutionStatus.LEDGER_UNAVAILABLE,
                        command=command,
                        ledger_failure=LedgerUnavailable(reason=error.message),
                    ),
                    timer,
                )

            return self._resolve(command, customers, session_id, timer)

    def resolve(
        self,
        command: ParsedCommand,
        customers: Sequence[CustomerRecord],
    ) -> ResolutionResult:
        """
        Match a parsed command against an already-fetched snapshot.

        Synchronous; ``handle_transcript`` calls this after its single
        ledger read.
        """
        session_id = uuid4().hex[:12]
        with logging_context(session_id=session_id, language=command.language):
            if self.awaiting_selection:
                return self._selection_open(session_id, PipelineTimer())
            self._session_id = session_id
            return self._resolve(command, customers, session_id, PipelineTimer())

    def select(self, customer_id: str) -> ResolutionResult:
        """User tapped a customer in the selection list."""
        with logging_context(session_id=self._session_id):
            outcome = self.coordinator.select(customer_id)
            return self._from_outcome(outcome, PipelineTimer())

    def cancel(self) -> ResolutionResult:
        """User dismissed the selection list; the pending command is dropped."""
        with logging_context(session_id=self._session_id):
            outcome = self.coordinator.dismiss()
            return self._from_outcome(outcome, PipelineTimer())

    def _selection_open(self, session_id: str, timer: PipelineTimer) -> ResolutionResult:
        # One open selection at a time; the caller must resolve it first
        logger.warning("voice_command_rejected_selection_open", open_session_id=self._session_id)
        return self._finish(
            ResolutionResult(
                session_id=self._session_id or session_id,
                status=ResolutionStatus.REJECTED,
                options=list(self.coordinator.session.options),
                rejected_reason='A customer selection is already open',
            ),
            timer,
        )

    def _resolve(
        self,
        command: ParsedCommand,
        customers: Sequence[CustomerRecord],
        session_id: str,
        timer: PipelineTimer,
    ) -> ResolutionResult:
        snapshot = tuple(customers)

        with timer.stage("matching"):
            ranked = self.matcher.match(command.name_token or '', snapshot)

        logger.info(
            "matching_complete",
            customers=len(snapshot),
            candidates=len(ranked),
            best_score=ranked.best.score if ranked.best else None,
        )

        with timer.stage("disambiguation"):
            outcome = self.coordinator.begin(ranked, command)

        result = self._from_outcome(outcome, timer, session_id=session_id)
        result.command = command
        result.ranked = ranked
        if outcome.state == DisambiguationState.NO_MATCH:
            result.no_match = NoMatchFound(spoken_name=command.name_token or '')
        return result

    def _from_outcome(
        self,
        outcome: CoordinatorOutcome,
        timer: PipelineTimer,
        session_id: str | None = None,
    ) -> ResolutionResult:
        if outcome.submit_error is not None:
            status = ResolutionStatus.SUBMIT_FAILED
        elif outcome.rejected_reason is not None:
            status = ResolutionStatus.REJECTED
        else:
            status = _STATE_STATUS.get(outcome.state, ResolutionStatus.REJECTED)
        result = ResolutionResult(
            session_id=session_id or self._session_id or '',
            status=status,
            command=outcome.cancelled.pending_command if outcome.cancelled else None,
            intent=outcome.intent,
            options=list(outcome.options),
            cancelled=outcome.cancelled,
            rejected_reason=outcome.rejected_reason,
            submit_error=outcome.submit_error,
        )
        return self._finish(result, timer)

    def _finish(self, result: ResolutionResult, timer: PipelineTimer) -> ResolutionResult:
        result.processing_time_ms = int(timer.total_ms)
        result.stage_timings = timer.stages.copy()
        logger.info("voice_command_complete", status=result.status.value, **timer.summary())
        return result
