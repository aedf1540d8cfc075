"""
Request admission entities.
"""

from enum import Enum

from pydantic import BaseModel


class AdmissionOutcome(str, Enum):
    """Result of the admission gates."""

    ALLOWED = "allowed"
    BLACKLISTED = "blacklisted"
    RATE_LIMITED = "rate_limited"


class AdmissionDecision(BaseModel):
    """Decision for a single inbound request."""

    client_id: str
    outcome: AdmissionOutcome = AdmissionOutcome.ALLOWED
    remaining_tokens: int | None = None
    retry_after: int | None = None  # seconds

    @property
    def allowed(self) -> bool:
        return self.outcome == AdmissionOutcome.ALLOWED
