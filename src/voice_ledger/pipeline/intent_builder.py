"""
Builds the TransactionIntent handed to the transaction-entry screen.
"""

from ..models.customer import CustomerRecord
from ..models.intent import TransactionIntent
from ..models.transcript import ParsedCommand


def build_transaction_intent(customer: CustomerRecord, command: ParsedCommand) -> TransactionIntent:
    """Copy type and amount from the command; the note starts blank."""
    return TransactionIntent(
        customer=customer,
        type=command.transaction_type,
        amount=command.amount,
        note='',
    )
