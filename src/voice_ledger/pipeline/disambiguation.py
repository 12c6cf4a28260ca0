"""
Disambiguation coordinator: chooses between auto-accept and user selection.

States:

    IDLE --Begin--> NO_MATCH            (no candidate)
                    AUTO_RESOLVED       (exactly one candidate)
                    AWAITING_SELECTION  (several candidates)
    AWAITING_SELECTION --Select--> RESOLVED
    AWAITING_SELECTION --Dismiss--> CANCELLED

Terminal states accept a new Begin; Reset returns to IDLE from anywhere.
``transition`` is the pure table; ``DisambiguationCoordinator`` holds the
current state, emits intents, and converts illegal events and sink failures
into unaccepted outcomes so callers never see an exception.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Union

from ..clients.ledger import TransactionSink
from ..errors import InvalidTransitionError, ResolutionError, UnknownCandidateError, wrap_sink_error
from ..logging import get_logger
from ..models.customer import CustomerRecord, MatchCandidate, RankedMatchSet
from ..models.intent import TransactionIntent
from ..models.outcomes import UserCancelled
from ..models.transcript import ParsedCommand
from .intent_builder import build_transaction_intent

logger = get_logger(__name__)


class DisambiguationState(str, Enum):
    """Coordinator states."""

    IDLE = 'idle'
    NO_MATCH = 'no_match'
    AUTO_RESOLVED = 'auto_resolved'
    AWAITING_SELECTION = 'awaiting_selection'
    RESOLVED = 'resolved'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({
    DisambiguationState.NO_MATCH,
    DisambiguationState.AUTO_RESOLVED,
    DisambiguationState.RESOLVED,
    DisambiguationState.CANCELLED,
})


@dataclass(frozen=True)
class SelectionOption:
    """One row of the customer picker: name and phone, tap to select."""

    customer_id: str
    display_name: str
    phone: str
    score: float


@dataclass(frozen=True)
class DisambiguationSession:
    """Open selection among several candidates for one pending command."""

    candidates: tuple[MatchCandidate, ...]
    pending_command: ParsedCommand
    resolved: CustomerRecord | None = None

    @property
    def options(self) -> tuple[SelectionOption, ...]:
        return tuple(
            SelectionOption(
                customer_id=c.customer.id,
                display_name=c.customer.display_name,
                phone=c.customer.phone,
                score=c.score,
            )
            for c in self.candidates
        )

    def find(self, customer_id: str) -> MatchCandidate | None:
        for candidate in self.candidates:
            if candidate.customer.id == customer_id:
                return candidate
        return None


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class Begin:
    ranked: RankedMatchSet
    command: ParsedCommand


@dataclass(frozen=True)
class Select:
    customer_id: str


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class Reset:
    pass


CoordinatorEvent = Union[Begin, Select, Dismiss, Reset]


@dataclass(frozen=True)
class Transition:
    """Result of applying one event."""

    state: DisambiguationState
    session: DisambiguationSession | None = None
    resolved_customer: CustomerRecord | None = None
    command: ParsedCommand | None = None


def transition(
    state: DisambiguationState,
    session: DisambiguationSession | None,
    event: CoordinatorEvent,
) -> Transition:
    """
    Apply ``event`` to ``state``.

    Raises:
        InvalidTransitionError: event not allowed in ``state``
        UnknownCandidateError: Select names a customer not on offer
    """
    if isinstance(event, Reset):
        return Transition(state=DisambiguationState.IDLE)

    if isinstance(event, Begin):
        if state == DisambiguationState.AWAITING_SELECTION:
            raise InvalidTransitionError(
                "A customer selection is already open",
                context={'state': state.value},
            )
        if not event.command.success:
            raise InvalidTransitionError(
                "Cannot resolve an incomplete command",
                context={'missing': event.command.missing_fields},
            )
        ranked = event.ranked
        if ranked.is_empty:
            return Transition(state=DisambiguationState.NO_MATCH, command=event.command)
        if not ranked.is_ambiguous:
            return Transition(
                state=DisambiguationState.AUTO_RESOLVED,
                resolved_customer=ranked.candidates[0].customer,
                command=event.command,
            )
        return Transition(
            state=DisambiguationState.AWAITING_SELECTION,
            session=DisambiguationSession(
                candidates=ranked.candidates,
                pending_command=event.command,
            ),
            command=event.command,
        )

    if state != DisambiguationState.AWAITING_SELECTION or session is None:
        raise InvalidTransitionError(
            f"{type(event).__name__} requires an open customer selection",
            context={'state': state.value},
        )

    if isinstance(event, Select):
        candidate = session.find(event.customer_id)
        if candidate is None:
            raise UnknownCandidateError(
                "Selected customer was not offered",
                context={
                    'customer_id': event.customer_id,
                    'offered': [c.customer.id for c in session.candidates],
                },
            )
        return Transition(
            state=DisambiguationState.RESOLVED,
            session=replace(session, resolved=candidate.customer),
            resolved_customer=candidate.customer,
            command=session.pending_command,
        )

    if isinstance(event, Dismiss):
        return Transition(
            state=DisambiguationState.CANCELLED,
            command=session.pending_command,
        )

    raise InvalidTransitionError(
        "Unsupported event",
        context={'event': type(event).__name__},
    )


@dataclass(frozen=True)
class CoordinatorOutcome:
    """What the UI needs to render after an event."""

    state: DisambiguationState
    intent: TransactionIntent | None = None
    options: tuple[SelectionOption, ...] = ()
    cancelled: UserCancelled | None = None
    rejected_reason: str | None = None
    submit_error: str | None = None

    @property
    def accepted(self) -> bool:
        return self.rejected_reason is None and self.submit_error is None


class DisambiguationCoordinator:
    """
    Owns the disambiguation state and the open session.

    Usage:
        coordinator = DisambiguationCoordinator(sink)
        outcome = coordinator.begin(ranked, command)
        if outcome.state == DisambiguationState.AWAITING_SELECTION:
            outcome = coordinator.select(outcome.options[0].customer_id)
    """

    def __init__(
        self,
        sink: TransactionSink | None = None,
        intent_builder: Callable[[CustomerRecord, ParsedCommand], TransactionIntent] = build_transaction_intent,
    ):
        """
        Args:
            sink: TransactionSink that receives resolved intents (optional)
            intent_builder: Builds the intent from customer and command
        """
        self.sink = sink
        self.intent_builder = intent_builder
        self._state = DisambiguationState.IDLE
        self._session: DisambiguationSession | None = None

    @property
    def state(self) -> DisambiguationState:
        return self._state

    @property
    def session(self) -> DisambiguationSession | None:
        return self._session

    def begin(self, ranked: RankedMatchSet, command: ParsedCommand) -> CoordinatorOutcome:
        return self.dispatch(Begin(ranked=ranked, command=command))

    def select(self, customer_id: str) -> CoordinatorOutcome:
        return self.dispatch(Select(customer_id=customer_id))

    def dismiss(self) -> CoordinatorOutcome:
        return self.dispatch(Dismiss())

    def reset(self) -> CoordinatorOutcome:
        return self.dispatch(Reset())

    def dispatch(self, event: CoordinatorEvent) -> CoordinatorOutcome:
        """
        Apply an event; illegal events leave the state untouched.

        The resolved intent is submitted before the new state is committed,
        so a sink failure also leaves the state (and an open selection)
        as it was and the user can retry.
        """
        try:
            result = transition(self._state, self._session, event)
        except ResolutionError as exc:
            logger.warning(
                "disambiguation_event_rejected",
                event_type=type(event).__name__,
                state=self._state.value,
                reason=exc.message,
            )
            return self._unchanged(rejected_reason=exc.message)

        intent = None
        if result.resolved_customer is not None and result.command is not None:
            intent = self.intent_builder(result.resolved_customer, result.command)
            if self.sink is not None:
                try:
                    self.sink.submit(intent)
                except Exception as exc:
                    error = wrap_sink_error(exc, context={'customer_id': intent.customer.id})
                    logger.error(
                        "intent_submit_failed",
                        event_type=type(event).__name__,
                        state=self._state.value,
                        error=str(error),
                    )
                    return self._unchanged(submit_error=error.message)

        previous = self._state
        self._state = result.state
        # Sessions only live while a selection is open
        self._session = None if result.state.is_terminal else result.session

        logger.info(
            "disambiguation_transition",
            event_type=type(event).__name__,
            from_state=previous.value,
            to_state=result.state.value,
        )

        cancelled = None
        if result.state == DisambiguationState.CANCELLED and result.command is not None:
            cancelled = UserCancelled(pending_command=result.command)

        return CoordinatorOutcome(
            state=result.state,
            intent=intent,
            options=self._session.options if self._session else (),
            cancelled=cancelled,
        )

    def _unchanged(
        self,
        rejected_reason: str | None = None,
        submit_error: str | None = None,
    ) -> CoordinatorOutcome:
        return CoordinatorOutcome(
            state=self._state,
            options=self._session.options if self._session else (),
            rejected_reason=rejected_reason,
            submit_error=submit_error,
        )
