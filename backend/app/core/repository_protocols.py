"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Business outcomes (not found, duplicate email) travel as RepositoryResult,
      never as exceptions
    - get_by_id/update/delete/exists treat id <= 0 exactly like an absent id

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations may suspend (simulated latency, real IO)
"""

from dataclasses import dataclass
from typing import Protocol

from app.core.domain_types import RepositoryOutcome
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


@dataclass(frozen=True)
class RepositoryResult:
    """Tagged result of a create/update call."""
    outcome: RepositoryOutcome
    user: User | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is RepositoryOutcome.OK

    @classmethod
    def success(cls, user: User) -> "RepositoryResult":
        return cls(RepositoryOutcome.OK, user)

    @classmethod
    def not_found(cls) -> "RepositoryResult":
        return cls(RepositoryOutcome.NOT_FOUND)

    @classmethod
    def duplicate_email(cls) -> "RepositoryResult":
        return cls(RepositoryOutcome.DUPLICATE_EMAIL)


class UserRepository(Protocol):
    """Contract for user storage — implemented by shell."""
    async def list(self) -> list[User]: ...
    async def get_by_id(self, user_id: int) -> User | None: ...
    async def create(self, request: UserCreate) -> RepositoryResult: ...
    async def update(
        self, user_id: int, request: UserUpdate,
    ) -> RepositoryResult: ...
    async def delete(self, user_id: int) -> bool: ...
    async def exists(self, user_id: int) -> bool: ...
    async def email_exists(
        self, email: str, exclude_id: int | None = None,
    ) -> bool: ...
