#!/usr/bin/env python3
"""
Example: Resolve spoken ledger commands against a small customer list.

This script demonstrates:
1. A command that resolves to exactly one customer
2. An ambiguous first name that opens a customer selection
3. Regional-language commands with localized digits
4. The parse-failure and no-match signals

Optionally pass a JSON export of the customer table:

Usage:
    python examples/resolve_transcript.py [customers.json]
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from voice_ledger.clients import InMemoryLedger, JsonFileLedger, RecordingSink
from voice_ledger.models import CustomerRecord
from voice_ledger.pipeline import ResolutionStatus, VoiceCommandResolver


DEMO_CUSTOMERS = [
    CustomerRecord(id='1', display_name='Ramesh Kumar', phone='9876500001'),
    CustomerRecord(id='2', display_name='Ramesh Singh', phone='9876500002'),
    CustomerRecord(id='3', display_name='John Smith', phone='9876500003'),
    CustomerRecord(id='4', display_name='Priya Sharma', phone='9876500004'),
    CustomerRecord(id='5', display_name='जॉन', phone='9876500005'),
]

# (transcript, recognizer language tag)
UTTERANCES = [
    ("Give 500 to John", "en"),
    ("Received 300 from Ramesh", "en"),
    ("जॉन से 500 मिले", "hi-IN"),
    ("५०० जॉन को दिए", "hi-IN"),
    ("जॉनला 200 दिले", "mr-IN"),
    ("Give 100 to Zyxw", "en"),
    ("hello there", "en"),
]


def print_result(result) -> None:
    print(f"  Status: {result.status.value}")
    if result.command:
        print(
            f"  Parsed: {result.command.transaction_type.value} "
            f"{result.command.amount} / '{result.command.name_token}' ({result.command.language})"
        )
    if result.intent:
        print(
            f"  Intent: {result.intent.type.value} {result.intent.amount} "
            f"-> {result.intent.customer.display_name}"
        )
    if result.options:
        print("  Choose a customer:")
        for option in result.options:
            print(f"    [{option.customer_id}] {option.display_name}  {option.phone}  ({option.score:.2f})")
    for signal in (result.parse_failure, result.no_match):
        if signal:
            print("  " + signal.message.replace("\n", "\n  "))
    if result.submit_error:
        print(f"  Not saved: {result.submit_error}")
    print(f"  Processing time: {result.processing_time_ms}ms")


async def main():
    """Run the example resolver demonstration."""
    print("=" * 60)
    print("Voice Ledger Example")
    print("=" * 60)

    if len(sys.argv) > 1:
        ledger = JsonFileLedger(sys.argv[1])
        print(f"\nReading customers from {sys.argv[1]}")
    else:
        ledger = InMemoryLedger(DEMO_CUSTOMERS)

    sink = RecordingSink()
    resolver = VoiceCommandResolver(ledger, sink)

    for text, language in UTTERANCES:
        print("\n" + "-" * 60)
        print(f'"{text}" [{language}]')
        print("-" * 60)

        result = await resolver.handle_transcript(text, language)
        print_result(result)

        if result.status == ResolutionStatus.AWAITING_SELECTION:
            choice = result.options[-1].customer_id
            print(f"\n  User taps [{choice}]")
            print_result(resolver.select(choice))

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  Intents submitted: {len(sink.intents)}")
    for intent in sink.intents:
        print(f"    - {intent.type.value:<7} {intent.amount:>6}  {intent.customer.display_name}")


if __name__ == "__main__":
    asyncio.run(main())
