"""Domain Types — identity types and enums shared across the registry.

Invariants:
    - UserId wraps int — positive, assigned only by the repository
    - RepositoryOutcome encodes every business outcome of a mutation — no raw strings

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RepositoryOutcome(str, Enum):
    """Result tag for repository mutations."""
    OK = "ok"
    NOT_FOUND = "not_found"
    DUPLICATE_EMAIL = "duplicate_email"


class UserRole(str, Enum):
    """Roles carried by the fixed API tokens."""
    HR = "HR"
    IT = "IT"
    ADMIN = "Admin"
    DEMO = "Demo"
    USER = "User"
