"""
Tests for the disambiguation state machine and coordinator.
"""

import pytest

from voice_ledger.clients import RecordingSink
from voice_ledger.errors import InvalidTransitionError, UnknownCandidateError
from voice_ledger.models.transcript import ParsedCommand, TransactionType
from voice_ledger.pipeline.disambiguation import (
    Begin,
    DisambiguationCoordinator,
    DisambiguationState,
    Dismiss,
    Reset,
    Select,
    transition,
)
from voice_ledger.pipeline.matcher import find_best_matches

from conftest import make_customer


@pytest.fixture
def command() -> ParsedCommand:
    return ParsedCommand(
        transaction_type=TransactionType.PAYMENT,
        amount=300,
        name_token='ramesh',
        original_text='Received 300 from Ramesh',
        language='en',
    )


@pytest.fixture
def coordinator(sink) -> DisambiguationCoordinator:
    return DisambiguationCoordinator(sink)


class TestTransitionTable:
    """Test the pure transition function."""

    def test_no_candidates(self, command):
        ranked = find_best_matches('zyxw', [make_customer('c1', 'Ramesh Kumar')])

        result = transition(DisambiguationState.IDLE, None, Begin(ranked, command))

        assert result.state == DisambiguationState.NO_MATCH
        assert result.resolved_customer is None

    def test_single_candidate_auto_resolves(self, command):
        ranked = find_best_matches('ramesh', [make_customer('c1', 'Ramesh Kumar')])

        result = transition(DisambiguationState.IDLE, None, Begin(ranked, command))

        assert result.state == DisambiguationState.AUTO_RESOLVED
        assert result.resolved_customer.id == 'c1'
        assert result.session is None

    def test_several_candidates_open_a_session(self, command, customers):
        ranked = find_best_matches('ramesh', customers)

        result = transition(DisambiguationState.IDLE, None, Begin(ranked, command))

        assert result.state == DisambiguationState.AWAITING_SELECTION
        assert [o.customer_id for o in result.session.options] == ['c1', 'c2']
        assert result.session.pending_command == command

    def test_select_resolves_offered_customer(self, command, customers):
        opened = transition(
            DisambiguationState.IDLE, None, Begin(find_best_matches('ramesh', customers), command)
        )

        result = transition(opened.state, opened.session, Select('c2'))

        assert result.state == DisambiguationState.RESOLVED
        assert result.resolved_customer.display_name == 'Ramesh Singh'
        assert result.session.resolved.id == 'c2'
        assert result.command == command

    def test_select_unknown_customer(self, command, customers):
        opened = transition(
            DisambiguationState.IDLE, None, Begin(find_best_matches('ramesh', customers), command)
        )

        with pytest.raises(UnknownCandidateError) as exc_info:
            transition(opened.state, opened.session, Select('c3'))

        assert exc_info.value.context['offered'] == ['c1', 'c2']

    def test_dismiss_cancels(self, command, customers):
        opened = transition(
            DisambiguationState.IDLE, None, Begin(find_best_matches('ramesh', customers), command)
        )

        result = transition(opened.state, opened.session, Dismiss())

        assert result.state == DisambiguationState.CANCELLED
        assert result.resolved_customer is None

    @pytest.mark.parametrize("event", [Select('c1'), Dismiss()])
    def test_selection_events_need_open_session(self, event):
        with pytest.raises(InvalidTransitionError):
            transition(DisambiguationState.IDLE, None, event)

    def test_begin_while_awaiting_is_rejected(self, command, customers):
        ranked = find_best_matches('ramesh', customers)
        opened = transition(DisambiguationState.IDLE, None, Begin(ranked, command))

        with pytest.raises(InvalidTransitionError):
            transition(opened.state, opened.session, Begin(ranked, command))

    def test_begin_with_incomplete_command(self, customers):
        incomplete = ParsedCommand(name_token='ramesh', original_text='ramesh')

        with pytest.raises(InvalidTransitionError):
            transition(
                DisambiguationState.IDLE,
                None,
                Begin(find_best_matches('ramesh', customers), incomplete),
            )

    def test_terminal_states_accept_begin(self, command):
        ranked = find_best_matches('ramesh', [make_customer('c1', 'Ramesh Kumar')])

        for state in (DisambiguationState.NO_MATCH, DisambiguationState.RESOLVED, DisambiguationState.CANCELLED):
            assert transition(state, None, Begin(ranked, command)).state == DisambiguationState.AUTO_RESOLVED

    def test_reset_from_anywhere(self):
        for state in DisambiguationState:
            assert transition(state, None, Reset()).state == DisambiguationState.IDLE


class TestCoordinator:
    """Test the stateful coordinator and its intents."""

    def test_auto_resolve_submits_intent(self, coordinator, sink, command):
        ranked = find_best_matches('ramesh', [make_customer('c1', 'Ramesh Kumar')])

        outcome = coordinator.begin(ranked, command)

        assert outcome.state == DisambiguationState.AUTO_RESOLVED
        assert outcome.intent.customer.id == 'c1'
        assert outcome.intent.type == TransactionType.PAYMENT
        assert outcome.intent.amount == 300
        assert sink.intents == [outcome.intent]

    def test_no_match_submits_nothing(self, coordinator, sink, command):
        outcome = coordinator.begin(find_best_matches('zyxw', []), command)

        assert outcome.state == DisambiguationState.NO_MATCH
        assert outcome.intent is None
        assert sink.intents == []

    def test_selection_flow(self, coordinator, sink, command, customers):
        opened = coordinator.begin(find_best_matches('ramesh', customers), command)

        assert opened.state == DisambiguationState.AWAITING_SELECTION
        assert [o.display_name for o in opened.options] == ['Ramesh Kumar', 'Ramesh Singh']
        assert opened.intent is None
        assert sink.intents == []

        resolved = coordinator.select('c1')

        assert resolved.state == DisambiguationState.RESOLVED
        assert resolved.intent.customer.display_name == 'Ramesh Kumar'
        assert coordinator.session is None
        assert len(sink.intents) == 1

    def test_dismiss_drops_pending_command(self, coordinator, sink, command, customers):
        coordinator.begin(find_best_matches('ramesh', customers), command)

        outcome = coordinator.dismiss()

        assert outcome.state == DisambiguationState.CANCELLED
        assert outcome.cancelled.pending_command == command
        assert outcome.intent is None
        assert coordinator.session is None
        assert sink.intents == []

    def test_illegal_event_is_rejected_not_raised(self, coordinator, command, customers):
        coordinator.begin(find_best_matches('ramesh', customers), command)

        outcome = coordinator.select('c4')

        assert outcome.accepted is False
        assert outcome.state == DisambiguationState.AWAITING_SELECTION
        assert [o.customer_id for o in outcome.options] == ['c1', 'c2']
        assert coordinator.state == DisambiguationState.AWAITING_SELECTION

    def test_select_twice_is_rejected(self, coordinator, sink, command, customers):
        coordinator.begin(find_best_matches('ramesh', customers), command)
        coordinator.select('c1')

        outcome = coordinator.select('c2')

        assert outcome.accepted is False
        assert outcome.state == DisambiguationState.RESOLVED
        assert len(sink.intents) == 1

    def test_reset(self, coordinator, command, customers):
        coordinator.begin(find_best_matches('ramesh', customers), command)

        outcome = coordinator.reset()

        assert outcome.state == DisambiguationState.IDLE
        assert coordinator.session is None

    def test_works_without_sink(self, command):
        coordinator = DisambiguationCoordinator()
        ranked = find_best_matches('ramesh', [make_customer('c1', 'Ramesh Kumar')])

        assert coordinator.begin(ranked, command).intent is not None

    def test_custom_sink_receives_every_intent(self, command):
        sink = RecordingSink()
        coordinator = DisambiguationCoordinator(sink)
        ranked = find_best_matches('ramesh', [make_customer('c1', 'Ramesh Kumar')])

        coordinator.begin(ranked, command)
        coordinator.begin(ranked, command)

        assert len(sink.intents) == 2
        assert sink.last.customer.id == 'c1'


class FailingSink:
    """TransactionSink whose submit always fails."""

    def __init__(self):
        self.attempts = 0

    def submit(self, intent):
        self.attempts += 1
        raise RuntimeError("transaction screen closed")


class TestSinkFailure:
    """Test that a failing transaction sink leaves the coordinator unchanged."""

    def test_auto_resolve_submit_failure(self, command):
        failing = FailingSink()
        coordinator = DisambiguationCoordinator(failing)
        ranked = find_best_matches('ramesh', [make_customer('c1', 'Ramesh Kumar')])

        outcome = coordinator.begin(ranked, command)

        assert outcome.accepted is False
        assert 'transaction screen closed' in outcome.submit_error
        assert outcome.rejected_reason is None
        assert outcome.intent is None
        assert outcome.state == DisambiguationState.IDLE
        assert coordinator.state == DisambiguationState.IDLE
        assert failing.attempts == 1

    def test_select_submit_failure_keeps_selection_open(self, command, customers):
        failing = FailingSink()
        coordinator = DisambiguationCoordinator(failing)
        coordinator.begin(find_best_matches('ramesh', customers), command)

        outcome = coordinator.select('c1')

        assert outcome.accepted is False
        assert outcome.submit_error is not None
        assert outcome.state == DisambiguationState.AWAITING_SELECTION
        assert [o.customer_id for o in outcome.options] == ['c1', 'c2']
        assert coordinator.session is not None

    def test_selection_can_be_retried_after_submit_failure(self, command, customers):
        failing = FailingSink()
        coordinator = DisambiguationCoordinator(failing)
        coordinator.begin(find_best_matches('ramesh', customers), command)
        coordinator.select('c1')

        recording = RecordingSink()
        coordinator.sink = recording
        outcome = coordinator.select('c1')

        assert outcome.accepted is True
        assert outcome.state == DisambiguationState.RESOLVED
        assert recording.last.customer.id == 'c1'
