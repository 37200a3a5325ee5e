"""Users — CRUD endpoints over the injected UserRepository.

Invariants:
    - id <= 0 → 400 "Invalid user ID" before the repository is called
    - Non-integer id → RequestValidationError → 400 (api/error_handlers.py)
    - Repository outcomes are branched on explicitly: NOT_FOUND → 404,
      DUPLICATE_EMAIL → 409; unexpected exceptions propagate to the pipeline
    - Responses are UserResponse (camelCase)

Design Decisions:
    - Repository resolved from app.state via Depends: tests swap it by passing
      their own repository to create_app()
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.error_handlers import error_response
from app.core.domain_types import RepositoryOutcome
from app.core.repository_protocols import RepositoryResult, UserRepository
from app.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def _invalid_id(request: Request, user_id: int) -> JSONResponse:
    logger.warning(f"Invalid user ID provided: {user_id}")
    return error_response(
        request, status.HTTP_400_BAD_REQUEST,
        "Invalid user ID", "User ID must be a positive integer",
    )


def _not_found(request: Request, user_id: int) -> JSONResponse:
    logger.warning(f"User with ID {user_id} not found")
    return error_response(
        request, status.HTTP_404_NOT_FOUND,
        "User not found", f"User with ID {user_id} does not exist",
    )


def _conflict(request: Request, error: str, email: str | None) -> JSONResponse:
    logger.warning(f"{error}: email {email} already exists")
    return error_response(
        request, status.HTTP_409_CONFLICT,
        error, f"A user with email '{email}' already exists.",
    )


def _failed_result(
    request: Request, user_id: int, result: RepositoryResult,
    error: str, email: str | None,
) -> JSONResponse:
    if result.outcome is RepositoryOutcome.NOT_FOUND:
        return _not_found(request, user_id)
    return _conflict(request, error, email)


@router.get("", response_model=list[UserResponse])
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
):
    """Retrieve all users ordered by id."""
    users = await repository.list()
    logger.info(f"Successfully retrieved {len(users)} users")
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
):
    """Retrieve a single user."""
    if user_id <= 0:
        return _invalid_id(request, user_id)
    user = await repository.get_by_id(user_id)
    if user is None:
        return _not_found(request, user_id)
    return UserResponse.model_validate(user)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    request: Request,
    response: Response,
    repository: UserRepository = Depends(get_user_repository),
):
    """Create a user. Emails are unique case-insensitively."""
    result = await repository.create(body)
    if not result.ok:
        return _conflict(request, "User creation failed", body.email)
    response.headers["Location"] = f"{router.prefix}/{result.user.id}"
    logger.info(f"Created user with ID: {result.user.id}")
    return UserResponse.model_validate(result.user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserUpdate,
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
):
    """Partially update a user (blank names/email leave the field unchanged)."""
    if user_id <= 0:
        return _invalid_id(request, user_id)
    result = await repository.update(user_id, body)
    if not result.ok:
        return _failed_result(
            request, user_id, result, "User update failed", body.email,
        )
    return UserResponse.model_validate(result.user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
):
    """Delete a user."""
    if user_id <= 0:
        return _invalid_id(request, user_id)
    if not await repository.delete(user_id):
        return _not_found(request, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.head("/{user_id}")
@router.get("/{user_id}/exists")
async def user_exists(
    user_id: int,
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
) -> bool:
    """Check whether a user exists."""
    if user_id <= 0:
        return _invalid_id(request, user_id)
    return await repository.exists(user_id)
