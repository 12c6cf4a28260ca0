"""
TransactionIntent: the terminal output handed to the transaction-entry screen.
"""

from pydantic import BaseModel, Field, PositiveInt

from .customer import CustomerRecord
from .transcript import TransactionType


class TransactionIntent(BaseModel):
    """
    Pre-filled transaction awaiting user confirmation.

    The downstream collaborator validates, lets the user edit, and persists.
    """

    customer: CustomerRecord
    type: TransactionType
    amount: PositiveInt
    note: str = Field(default='', description='Free-text note, blank for voice entries')

    model_config = {'frozen': True}
