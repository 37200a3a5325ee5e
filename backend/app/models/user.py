"""User Record — immutable snapshot of one stored user.

Invariants:
    - Frozen: a stored record is never mutated in place; updates build a new record
    - email is always the normalized form (trimmed, lowercased)
    - id and created_at never change after creation
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.domain_types import UserId


@dataclass(frozen=True)
class User:
    id: UserId
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    updated_at: datetime | None = None
    is_active: bool = True
