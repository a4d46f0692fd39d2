"""
Record types for the score ledger.

Field names are snake_case in Python and camelCase when serialized, so a
dumped ``LedgerState`` has the same shape as the blob the browser and mobile
front ends keep in local storage.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class Round(_CamelModel):
    """One scored turn for both players, with running totals up to it."""

    session: StrictInt = Field(..., ge=1, description="Session this round belongs to")
    mike_score: StrictInt = Field(..., description="Mike's points this round")
    preeta_score: StrictInt = Field(..., description="Preeta's points this round")
    mike_session_total: StrictInt = Field(..., description="Mike's total within the session")
    preeta_session_total: StrictInt = Field(..., description="Preeta's total within the session")
    mike_overall_total: StrictInt = Field(..., description="Mike's total across all rounds")
    preeta_overall_total: StrictInt = Field(..., description="Preeta's total across all rounds")

    def as_row(self) -> List[int]:
        """Values in CSV column order."""
        return [
            self.session,
            self.mike_score,
            self.preeta_score,
            self.mike_session_total,
            self.preeta_session_total,
            self.mike_overall_total,
            self.preeta_overall_total,
        ]


class LedgerState(_CamelModel):
    """The persisted unit: every round plus the session new rounds join."""

    rounds: List[Round] = Field(default_factory=list)
    current_session: StrictInt = Field(1, ge=1)

    @field_validator('rounds', mode='before')
    @classmethod
    def default_rounds(cls, v):
        """Treat a null rounds list as empty."""
        return [] if v is None else v

    @field_validator('current_session', mode='before')
    @classmethod
    def default_current_session(cls, v):
        """Treat a null or zero session counter as the first session."""
        return v or 1


class SessionTotals(_CamelModel):
    mike_session_total: int = 0
    preeta_session_total: int = 0


class OverallTotals(_CamelModel):
    mike_overall_total: int = 0
    preeta_overall_total: int = 0


class AngerLevel(str, Enum):
    NEUTRAL = 'neutral'
    ANNOYED = 'annoyed'
    ANGRY = 'angry'


class AngerLevels(_CamelModel):
    mike_anger: AngerLevel = AngerLevel.NEUTRAL
    preeta_anger: AngerLevel = AngerLevel.NEUTRAL
