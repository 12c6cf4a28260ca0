"""
Transcript and parsed voice command models.

A VoiceTranscript is what the speech recognizer hands us. The command
extractor turns it into either a ParsedCommand (transaction entry) or a
NewCustomerCommand (customer creation). Both are immutable.
"""

from enum import Enum

from pydantic import BaseModel, Field, PositiveInt


class TransactionType(str, Enum):
    """Direction of a ledger transaction."""

    CREDIT = 'CREDIT'  # credit given to the customer
    PAYMENT = 'PAYMENT'  # payment received from the customer
    UNKNOWN = 'UNKNOWN'


class VoiceTranscript(BaseModel):
    """Raw speech-recognition output for one voice session."""

    text: str = Field(default='', description='Transcript exactly as recognized')
    language_tag: str = Field(
        default='en', description='Recognizer language tag (e.g. "hi", "hi-IN", "en")'
    )

    model_config = {'frozen': True}


class ParsedCommand(BaseModel):
    """
    Structured transaction command extracted from a transcript.

    Absent fields signal failure to the caller; nothing here raises.
    """

    transaction_type: TransactionType = Field(
        default=TransactionType.UNKNOWN, description='Detected transaction direction'
    )
    amount: PositiveInt | None = Field(
        default=None, description='First number spoken, if any'
    )
    name_token: str | None = Field(
        default=None, description='Spoken customer-name fragment, normalized (lowercase)'
    )
    original_text: str = Field(default='', description='Transcript as originally spoken')
    language: str = Field(default='en', description='Language table used for parsing')

    model_config = {'frozen': True}

    @property
    def success(self) -> bool:
        """True when direction, amount and name were all extracted."""
        return (
            self.transaction_type != TransactionType.UNKNOWN
            and self.amount is not None
            and bool(self.name_token)
        )

    @property
    def missing_fields(self) -> list[str]:
        """Names of the fields that could not be extracted."""
        missing = []
        if self.transaction_type == TransactionType.UNKNOWN:
            missing.append('transaction_type')
        if self.amount is None:
            missing.append('amount')
        if not self.name_token:
            missing.append('name_token')
        return missing


class NewCustomerCommand(BaseModel):
    """Customer-creation command ("Add customer John number 9876543210")."""

    customer_name: str | None = Field(default=None, description='Title-cased customer name')
    phone_number: str | None = Field(default=None, description='Ten-digit phone number')
    original_text: str = Field(default='', description='Transcript as originally spoken')
    language: str = Field(default='en', description='Language table used for parsing')

    model_config = {'frozen': True}

    @property
    def success(self) -> bool:
        return bool(self.customer_name) and self.phone_number is not None and len(self.phone_number) == 10
