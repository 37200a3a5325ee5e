"""User Rules — pure construction and update of user records.

Invariants:
    - normalize_email is the single definition of the uniqueness key (strip + lower)
    - build_user never reads the clock itself; callers pass `now`
    - apply_user_update returns a new record; the input record is untouched
    - Blank first/last name or email in an update = no change;
      phone/department/position overwrite whenever not None (including "");
      is_active overwrites whenever not None
"""

from dataclasses import replace
from datetime import datetime

from app.core.domain_types import UserId
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


def normalize_email(email: str) -> str:
    """Uniqueness key for an email address."""
    return email.strip().lower()


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _strip_optional(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def build_user(user_id: UserId, request: UserCreate, now: datetime) -> User:
    """Build a new active user record from a creation request."""
    return User(
        id=user_id,
        first_name=request.first_name.strip(),
        last_name=request.last_name.strip(),
        email=normalize_email(request.email),
        phone_number=_strip_optional(request.phone_number),
        department=_strip_optional(request.department),
        position=_strip_optional(request.position),
        created_at=now,
        is_active=True,
    )


def email_changes(user: User, request: UserUpdate) -> bool:
    """True when the update supplies a non-blank email different from the stored one."""
    if is_blank(request.email):
        return False
    return normalize_email(request.email) != normalize_email(user.email)


def apply_user_update(user: User, request: UserUpdate, now: datetime) -> User:
    """Apply field-presence rules and stamp updated_at."""
    changes: dict = {"updated_at": now}
    if not is_blank(request.first_name):
        changes["first_name"] = request.first_name.strip()
    if not is_blank(request.last_name):
        changes["last_name"] = request.last_name.strip()
    if not is_blank(request.email):
        changes["email"] = normalize_email(request.email)
    # Present-but-empty overwrites for the optional contact fields
    for name in ("phone_number", "department", "position"):
        value = getattr(request, name)
        if value is not None:
            changes[name] = value.strip()
    if request.is_active is not None:
        changes["is_active"] = request.is_active
    return replace(user, **changes)
