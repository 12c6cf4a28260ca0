"""
Pytest configuration and shared fixtures.

Key fixtures:
- customers: small mixed-script customer snapshot
- ledger: InMemoryLedger over that snapshot
- sink: RecordingSink capturing submitted intents
- resolver: VoiceCommandResolver wired to ledger and sink
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from voice_ledger.clients import InMemoryLedger, RecordingSink
from voice_ledger.models import CustomerRecord
from voice_ledger.pipeline import VoiceCommandResolver


def make_customer(customer_id: str, name: str, phone: str = '') -> CustomerRecord:
    return CustomerRecord(id=customer_id, display_name=name, phone=phone)


@pytest.fixture
def customers() -> list[CustomerRecord]:
    """Customer snapshot with an ambiguous first name and a Devanagari name."""
    return [
        make_customer('c1', 'Ramesh Kumar', '9876500001'),
        make_customer('c2', 'Ramesh Singh', '9876500002'),
        make_customer('c3', 'John Smith', '9876500003'),
        make_customer('c4', 'Priya Sharma', '9876500004'),
        make_customer('c5', 'जॉन', '9876500005'),
    ]


@pytest.fixture
def ledger(customers) -> InMemoryLedger:
    return InMemoryLedger(customers)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def resolver(ledger, sink) -> VoiceCommandResolver:
    return VoiceCommandResolver(ledger, sink, min_score=0.6, english_retry=True)
