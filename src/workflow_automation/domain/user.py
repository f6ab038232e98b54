from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from .clock import Clock
from .errors import EmptyName, InvalidEmail

MIN_EMAIL_LENGTH = 3
MAX_EMAIL_LENGTH = 255


def is_valid_email(email: str) -> bool:
    """Loose structural check: ``local@domain`` with both parts non-empty."""

    if not MIN_EMAIL_LENGTH <= len(email) <= MAX_EMAIL_LENGTH:
        return False
    local, sep, domain = email.partition("@")
    return bool(sep and local and domain)


@dataclass(frozen=True, slots=True)
class User:
    """A registered user. Separate aggregate, unrelated to workflow behaviour."""

    id: UUID
    name: str
    email: str
    created_at: datetime

    @classmethod
    def create(cls, name: str, email: str, *, clock: Clock) -> User:
        if not name:
            raise EmptyName()
        if not is_valid_email(email):
            raise InvalidEmail(f"invalid email: {email!r}")
        return cls(id=uuid4(), name=name, email=email, created_at=clock())
