"""Credentials — public-path classification, token extraction and the fixed token table.

Invariants:
    - Extraction order: Authorization Bearer → X-API-Key → ?token=; first match wins
    - Extracted candidates are trimmed; an empty result means "no credential"
    - "/" is public only as an exact match; every other public entry also covers sub-paths
    - DEFAULT_TOKENS is read-only (MappingProxyType)

Design Decisions:
    - Pure functions over Mapping inputs: callable with Starlette headers or plain dicts
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from app.core.domain_types import UserRole

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class TokenIdentity:
    user_id: str
    role: UserRole


DEFAULT_TOKENS: Mapping[str, TokenIdentity] = MappingProxyType({
    "api-key-hr-department-2024": TokenIdentity("hr-user", UserRole.HR),
    "api-key-it-department-2024": TokenIdentity("it-user", UserRole.IT),
    "api-key-admin-2024": TokenIdentity("admin-user", UserRole.ADMIN),
    "demo-token-for-testing": TokenIdentity("demo-user", UserRole.DEMO),
})

DEFAULT_PUBLIC_PATHS = (
    "/", "/health", "/api/health", "/api/docs", "/swagger", "/openapi",
)


def is_public_path(path: str, public_paths: Iterable[str]) -> bool:
    """Case-insensitive public-path check."""
    path = path.lower()
    for entry in public_paths:
        entry = entry.lower()
        if entry == "/":
            if path == "/":
                return True
            continue
        entry = entry.rstrip("/")
        if path == entry or path.startswith(entry + "/"):
            return True
    return False


def extract_token(
    headers: Mapping[str, str], query_params: Mapping[str, str],
) -> str | None:
    """Return the trimmed credential, or None when none was supplied."""
    auth_header = headers.get("authorization") or ""
    if auth_header.lower().startswith(BEARER_PREFIX):
        return auth_header[len(BEARER_PREFIX):].strip() or None

    api_key = headers.get("x-api-key") or ""
    if api_key:
        return api_key.strip() or None

    query_token = query_params.get("token") or ""
    if query_token:
        return query_token.strip() or None

    return None


def resolve_identity(
    token: str, tokens: Mapping[str, TokenIdentity],
) -> TokenIdentity | None:
    """Look up the identity for a token; None when the token is not valid."""
    return tokens.get(token)
