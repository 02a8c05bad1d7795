from dataclasses import dataclass
from datetime import datetime, timedelta

from email_proof.domain.services import same_email


@dataclass(frozen=True)
class ProofItem:
    email: str
    code: int
    created_at: datetime

    def __post_init__(self):
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")

    def matches(self, email: str) -> bool:
        return same_email(self.email, email)

    def is_valid_at(self, now: datetime, window: timedelta) -> bool:
        return now - self.created_at < window
