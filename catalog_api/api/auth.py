"""Account API endpoints.

- POST /signup - register with email and password
- POST /signin - exchange credentials for a bearer token
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.api.schemas import (
    CredentialsRequest,
    ErrorResponse,
    SigninResponse,
    SignupResponse,
    TokenSchema,
    UserSchema,
)
from catalog_api.application.user_service import UserService
from catalog_api.infrastructure.database import get_session

router = APIRouter(tags=["Auth"])


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserService:
    """Get user service bound to the request session."""
    return UserService(session)


@router.post(
    "/signup",
    response_model=SignupResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Sign up",
)
async def sign_up(
    request: CredentialsRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> SignupResponse:
    """Register a new user."""
    user = await service.sign_up(request.email, request.password)
    return SignupResponse(
        success=True,
        message="User registered successfully.",
        data=UserSchema(id=user.id, email=user.email),
    )


@router.post(
    "/signin",
    response_model=SigninResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Sign in",
)
async def sign_in(
    request: CredentialsRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> SigninResponse:
    """Exchange credentials for an access token."""
    result = await service.sign_in(request.email, request.password)
    return SigninResponse(
        success=True,
        message="Signed in successfully.",
        data=TokenSchema(token=result.access_token, token_type=result.token_type),
    )
