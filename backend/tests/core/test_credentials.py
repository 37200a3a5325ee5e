"""Tests for credentials — public paths, extraction order, token table."""

import pytest

from app.core.credentials import (
    DEFAULT_PUBLIC_PATHS,
    DEFAULT_TOKENS,
    extract_token,
    is_public_path,
    resolve_identity,
)
from app.core.domain_types import UserRole


# --- is_public_path ----------------------------------------------------------

@pytest.mark.parametrize(
    "path",
    ["/", "/health", "/HEALTH", "/api/health", "/api/docs", "/swagger",
     "/swagger/index.html", "/openapi/v1.json"],
)
def test_public_paths(path):
    assert is_public_path(path, DEFAULT_PUBLIC_PATHS)


@pytest.mark.parametrize(
    "path", ["/api/users", "/api/users/1", "/healthz", "/swaggerish"],
)
def test_protected_paths(path):
    assert not is_public_path(path, DEFAULT_PUBLIC_PATHS)


def test_root_entry_matches_only_root():
    assert not is_public_path("/api/users", ["/"])


# --- extract_token -----------------------------------------------------------

def test_bearer_header_is_trimmed():
    assert extract_token({"authorization": "Bearer  abc  "}, {}) == "abc"


def test_bearer_scheme_is_case_insensitive():
    assert extract_token({"authorization": "bearer abc"}, {}) == "abc"


def test_bearer_wins_over_api_key_and_query():
    headers = {"authorization": "Bearer first", "x-api-key": "second"}
    assert extract_token(headers, {"token": "third"}) == "first"


def test_api_key_wins_over_query():
    assert extract_token({"x-api-key": " key "}, {"token": "q"}) == "key"


def test_query_token_is_last_resort():
    assert extract_token({}, {"token": "q"}) == "q"


def test_non_bearer_authorization_falls_through():
    assert extract_token({"authorization": "Basic dXNlcg=="}, {"token": "q"}) == "q"


def test_missing_credential_returns_none():
    assert extract_token({}, {}) is None


def test_blank_bearer_returns_none():
    assert extract_token({"authorization": "Bearer    "}, {"token": "q"}) is None


# --- token table -------------------------------------------------------------

def test_token_table_has_four_entries():
    assert len(DEFAULT_TOKENS) == 4


def test_resolve_identity_known_token():
    identity = resolve_identity("api-key-hr-department-2024", DEFAULT_TOKENS)
    assert identity.user_id == "hr-user"
    assert identity.role == UserRole.HR


def test_resolve_identity_unknown_token():
    assert resolve_identity("not-a-token", DEFAULT_TOKENS) is None


def test_token_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TOKENS["new"] = DEFAULT_TOKENS["demo-token-for-testing"]
