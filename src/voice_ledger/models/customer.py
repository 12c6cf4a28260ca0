"""
Customer ledger records and match candidates.

CustomerRecord is owned by the ledger; this package only ever reads a
snapshot of it. MatchCandidate and RankedMatchSet are produced by the
matching engine and ranking filter.
"""

from enum import Enum

from pydantic import BaseModel, Field


class CustomerRecord(BaseModel):
    """A customer as stored in the external ledger (read-only)."""

    id: str = Field(..., description='Ledger identifier')
    display_name: str = Field(..., description='Name shown in the customer list')
    phone: str = Field(default='', description='Phone number, if recorded')
    address: str = Field(default='', description='Postal address, if recorded')
    balance: float = Field(default=0.0, description='Outstanding balance')

    model_config = {'frozen': True}


class MatchStrategy(str, Enum):
    """Rule that produced a candidate's score, strongest first."""

    EXACT = 'exact'
    SUBSTRING = 'substring'
    PHONETIC = 'phonetic'
    PARTIAL = 'partial'
    SIMILARITY = 'similarity'


class MatchCandidate(BaseModel):
    """A customer scored against the spoken name fragment."""

    customer: CustomerRecord
    score: float = Field(..., ge=0.0, le=1.0, description='Match score in [0, 1]')
    strategy: MatchStrategy

    model_config = {'frozen': True}


class RankedMatchSet(BaseModel):
    """
    Candidates at or above the threshold, best first.

    Ties keep the order of the customer snapshot.
    """

    spoken_name: str
    threshold: float = Field(..., ge=0.0, le=1.0)
    candidates: tuple[MatchCandidate, ...] = ()

    model_config = {'frozen': True}

    def __len__(self) -> int:
        return len(self.candidates)

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    @property
    def is_ambiguous(self) -> bool:
        """More than one plausible customer; the user has to choose."""
        return len(self.candidates) > 1

    @property
    def best(self) -> MatchCandidate | None:
        return self.candidates[0] if self.candidates else None

    @property
    def customers(self) -> list[CustomerRecord]:
        return [c.customer for c in self.candidates]
