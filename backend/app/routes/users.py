"""
Task Board Backend — User Route Handlers
==========================================

What:  POST /users (upsert by email) and GET /users/{email} (profile lookup).
How:   Thin handlers: the body/path value goes to UserService, the result is
       shaped into the response model; errors surface through the global
       exception handlers registered in main.py.
"""

from fastapi import APIRouter, Depends, Response, status

from app.dependencies import get_user_service
from app.schemas.common import ErrorResponse
from app.schemas.user import UserProfile, UserUpsertRequest, UserUpsertResponse
from app.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=UserUpsertResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Existing user refreshed", "model": UserUpsertResponse},
        201: {"description": "New user created", "model": UserUpsertResponse},
        400: {"description": "Email missing", "model": ErrorResponse},
        409: {"description": "Duplicate email race", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create or refresh a user profile",
)
async def upsert_user(
    payload: UserUpsertRequest,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserUpsertResponse:
    """
    Single atomic upsert keyed on email.

    Status: 201 when a document was inserted, 200 when one was updated.
    `createdAt` is written only on insert; `updatedAt` on every call.
    """
    created, email = await service.upsert_user(payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return UserUpsertResponse(ok=True, created=created, email=email)


@router.get(
    "/users/{email}",
    response_model=UserProfile,
    responses={
        400: {"description": "Empty email", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a user's public profile",
)
async def get_user(
    email: str,
    service: UserService = Depends(get_user_service),
) -> UserProfile:
    """Exact email match first, lower-cased fallback second."""
    doc = await service.get_user(email)
    return UserProfile.model_validate(doc)
