"""
Admin API Routes - Identity Administration Endpoints

These endpoints are for internal service integrations (onboarding back office).
Authentication is via Admin API Key, not bearer tokens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.identities import (
    DisableIdentityUseCase,
    IdentityResponse,
    RegisterIdentityCommand,
    RegisterIdentityUseCase,
)
from src.depends import get_unit_of_work
from src.domain.entities import Role

router = APIRouter(prefix="/admin", tags=["Admin"])


class RegisterIdentityRequest(BaseModel):
    """
    Register identity HTTP request payload

    Validates incoming HTTP request before converting to RegisterIdentityCommand.
    """

    role: Role = Field(..., description="SUPER_ADMIN, BUILDING_ADMIN, SECURITY or RESIDENT")
    password: str = Field(..., min_length=8, max_length=255, description="Password (min 8 chars)")
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    username: Optional[str] = Field(None, max_length=64)
    building_id: Optional[str] = Field(None, max_length=64)


@router.post(
    "/identities",
    status_code=status.HTTP_201_CREATED,
    response_model=IdentityResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def register_identity(
    request: RegisterIdentityRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register Identity

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: IDENTIFIER_REQUIRED, BUILDING_REQUIRED, INVALID_PASSWORD
        - 401 Unauthorized: Missing or invalid admin API key
        - 409 Conflict: IDENTIFIER_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    command = RegisterIdentityCommand(**request.model_dump())

    use_case = RegisterIdentityUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("IDENTIFIER_REQUIRED", "BUILDING_REQUIRED", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "IDENTIFIER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/identities/{identity_id}/disable",
    status_code=status.HTTP_200_OK,
    response_model=IdentityResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def disable_identity(
    identity_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Disable Identity

    Soft-disables the identity; it can no longer log in or complete OTP.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: IDENTITY_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = DisableIdentityUseCase(uow)
    result = await use_case.execute(identity_id)

    if result.is_err():
        error = result.error
        if error.code == "IDENTITY_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
