"""
Collaborator boundaries for reading customers and submitting transactions.
"""

from .ledger import InMemoryLedger, JsonFileLedger, LedgerReader, RecordingSink, TransactionSink

__all__ = [
    'LedgerReader',
    'TransactionSink',
    'InMemoryLedger',
    'JsonFileLedger',
    'RecordingSink',
]
