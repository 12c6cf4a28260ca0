"""
Ledger collaborator boundaries.

The resolver reads customers through a LedgerReader and hands finished
intents to a TransactionSink. Persistence lives behind these protocols;
this package never writes to the ledger.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence, runtime_checkable

from ..logging import get_logger
from ..models.customer import CustomerRecord
from ..models.intent import TransactionIntent

logger = get_logger(__name__)


@runtime_checkable
class LedgerReader(Protocol):
    """Source of the customer snapshot for one voice command."""

    async def fetch_customers(self) -> Sequence[CustomerRecord]:
        ...


@runtime_checkable
class TransactionSink(Protocol):
    """Transaction-entry collaborator: confirms, edits and persists intents."""

    def submit(self, intent: TransactionIntent) -> None:
        ...


class InMemoryLedger:
    """LedgerReader over a fixed list of customers."""

    def __init__(self, customers: Iterable[CustomerRecord] = ()):
        self._customers = list(customers)
        self.read_count = 0

    async def fetch_customers(self) -> tuple[CustomerRecord, ...]:
        self.read_count += 1
        return tuple(self._customers)


class JsonFileLedger:
    """
    LedgerReader over a JSON export of the customer table.

    Accepts either the package's field names or the mobile app's export
    keys ("Customer Name", "Phone Number", "Total Balance", ...). Export
    columns with no counterpart ("Display ID", "Created At") are ignored,
    and null phone, address or balance cells read as empty.

    The file is read on a worker thread so the event loop is not blocked.
    """

    _EXPORT_KEYS = {
        'Customer ID': 'id',
        'Customer Name': 'display_name',
        'Phone Number': 'phone',
        'Address': 'address',
        'Total Balance': 'balance',
        'Balance': 'balance',
    }

    _NULL_DEFAULTS = {'phone': '', 'address': '', 'balance': 0.0}

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def fetch_customers(self) -> tuple[CustomerRecord, ...]:
        text = await asyncio.to_thread(self.path.read_text, encoding='utf-8')
        rows = json.loads(text)
        customers = tuple(self._to_record(i, row) for i, row in enumerate(rows))
        logger.debug("ledger_loaded", path=str(self.path), customers=len(customers))
        return customers

    def _to_record(self, index: int, row: dict[str, Any]) -> CustomerRecord:
        data = {self._EXPORT_KEYS.get(k, k): v for k, v in row.items()}
        for key, default in self._NULL_DEFAULTS.items():
            if data.get(key) is None:
                data[key] = default
        data.setdefault('id', str(index))
        data['id'] = str(data['id'])
        data['phone'] = str(data['phone'])
        return CustomerRecord.model_validate(data)


class RecordingSink:
    """TransactionSink that keeps every submitted intent in order."""

    def __init__(self):
        self.intents: list[TransactionIntent] = []

    def submit(self, intent: TransactionIntent) -> None:
        self.intents.append(intent)

    @property
    def last(self) -> TransactionIntent | None:
        return self.intents[-1] if self.intents else None
