"""In-Memory User Repository — concurrency-safe keyed store with simulated latency.

Invariants:
    - Ids come from a monotonic counter and are never reused, even after delete
    - One asyncio.Lock covers every mutation together with the uniqueness check it
      depends on, including the simulated latency between check and write
    - Reads take no lock: records are frozen and replaced by a single dict assignment,
      so a reader sees either the whole old or the whole new record
    - Stored emails are normalized; uniqueness spans active and inactive users
    - Not found / duplicate email are returned as RepositoryResult, never raised

Design Decisions:
    - asyncio.Lock over threading.Lock: every route is async and runs on the
      event loop, so the lock must be awaitable across the latency sleep
    - Simulated latency configurable (REPOSITORY_LATENCY_MS); tests run with 0
"""

import asyncio
import itertools
import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from app.core.domain_types import UserId
from app.core.repository_protocols import RepositoryResult
from app.core.user_rules import (
    apply_user_update, build_user, email_changes, is_blank, normalize_email,
)
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# (request, age) pairs; created_at is backdated by `age`
DEFAULT_SEED_USERS: tuple[tuple[UserCreate, timedelta], ...] = (
    (
        UserCreate(
            first_name="John", last_name="Doe",
            email="john.doe@techhive.com", phone_number="555-0123",
            department="IT", position="Software Engineer",
        ),
        timedelta(days=30),
    ),
    (
        UserCreate(
            first_name="Jane", last_name="Smith",
            email="jane.smith@techhive.com", phone_number="555-0124",
            department="HR", position="HR Manager",
        ),
        timedelta(days=15),
    ),
)


class InMemoryUserRepository:
    """UserRepository backed by a dict of frozen User records."""

    def __init__(
        self,
        latency_ms: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()
        self._latency = latency_ms / 1000
        self._clock = clock

    async def _simulate_latency(self, factor: float = 1.0) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency * factor)

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        normalized = normalize_email(email)
        return any(
            user.email == normalized and user.id != exclude_id
            for user in self._users.values()
        )

    def seed(self, users: Iterable[tuple[UserCreate, timedelta]]) -> list[User]:
        """Insert startup data synchronously. Duplicate emails are skipped."""
        seeded = []
        now = self._clock()
        for request, age in users:
            if self._email_taken(request.email):
                logger.warning(f"Seed email {request.email} already exists, skipping")
                continue
            user = build_user(UserId(next(self._ids)), request, now - age)
            self._users[user.id] = user
            seeded.append(user)
        logger.info(f"Seeded {len(seeded)} users")
        return seeded

    # ─── Reads ───────────────────────────────────────────────────

    async def list(self) -> list[User]:
        logger.info("Retrieving all users")
        await self._simulate_latency()
        users = sorted(self._users.values(), key=lambda u: u.id)
        logger.info(f"Retrieved {len(users)} users")
        return users

    async def get_by_id(self, user_id: int) -> User | None:
        if user_id <= 0:
            logger.warning(f"Invalid user ID provided: {user_id}")
            return None
        await self._simulate_latency()
        user = self._users.get(user_id)
        if user is None:
            logger.warning(f"User with ID {user_id} not found")
        return user

    async def exists(self, user_id: int) -> bool:
        if user_id <= 0:
            return False
        await self._simulate_latency(0.5)
        return user_id in self._users

    async def email_exists(
        self, email: str, exclude_id: int | None = None,
    ) -> bool:
        """Uniqueness check used by create/update while holding the lock."""
        if is_blank(email):
            return False
        await self._simulate_latency(0.5)
        return self._email_taken(email, exclude_id)

    # ─── Mutations ───────────────────────────────────────────────

    async def create(self, request: UserCreate) -> RepositoryResult:
        logger.info(f"Creating new user with email: {request.email}")
        async with self._lock:
            if await self.email_exists(request.email):
                logger.warning(f"Email {request.email} already exists")
                return RepositoryResult.duplicate_email()
            user = build_user(UserId(next(self._ids)), request, self._clock())
            await self._simulate_latency()
            self._users[user.id] = user
        logger.info(f"Successfully created user with ID: {user.id}")
        return RepositoryResult.success(user)

    async def update(
        self, user_id: int, request: UserUpdate,
    ) -> RepositoryResult:
        logger.info(f"Updating user with ID: {user_id}")
        if user_id <= 0:
            logger.warning(f"Invalid user ID provided for update: {user_id}")
            return RepositoryResult.not_found()
        async with self._lock:
            existing = self._users.get(user_id)
            if existing is None:
                logger.warning(f"User with ID {user_id} not found for update")
                return RepositoryResult.not_found()
            if email_changes(existing, request) and await self.email_exists(
                request.email, exclude_id=user_id,
            ):
                logger.warning(
                    f"Email {request.email} already exists for another user",
                )
                return RepositoryResult.duplicate_email()
            updated = apply_user_update(existing, request, self._clock())
            await self._simulate_latency()
            self._users[user_id] = updated
        logger.info(f"Successfully updated user with ID: {user_id}")
        return RepositoryResult.success(updated)

    async def delete(self, user_id: int) -> bool:
        logger.info(f"Deleting user with ID: {user_id}")
        if user_id <= 0:
            logger.warning(f"Invalid user ID provided for deletion: {user_id}")
            return False
        async with self._lock:
            await self._simulate_latency()
            removed = self._users.pop(user_id, None)
        if removed is None:
            logger.warning(f"User with ID {user_id} not found for deletion")
            return False
        logger.info(f"Successfully deleted user with ID: {user_id}")
        return True


def build_user_repository(
    latency_ms: int = 10, seed_users: bool = True,
) -> InMemoryUserRepository:
    """Construct the repository used by create_app()."""
    repository = InMemoryUserRepository(latency_ms=latency_ms)
    if seed_users:
        repository.seed(DEFAULT_SEED_USERS)
    return repository
