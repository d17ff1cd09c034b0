from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, model_validator

from src.api.error import authentication_error
from src.app.services.auth_components import AuthComponents
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    ResendOtpUseCase,
    SessionInfo,
    TokenResponse,
    VerifyOtpUseCase,
)
from src.depends import get_auth_components, get_current_session, get_unit_of_work
from src.domain.entities import IdentifierKind, LoginIdentifier, Session

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Exactly one identifier field: a typed one (email, phone, username) or
    the generic "identifier" matched against all three.
    """

    identifier: Optional[str] = Field(None, max_length=255, description="Email, phone or username")
    email: Optional[str] = Field(None, max_length=255, description="Email address")
    phone: Optional[str] = Field(None, max_length=32, description="Phone number")
    username: Optional[str] = Field(None, max_length=64, description="Username")
    password: str = Field(..., min_length=1, max_length=255, description="Password")

    @model_validator(mode="after")
    def _exactly_one_identifier(self) -> "LoginRequest":
        provided = []
        for field in ("identifier", "email", "phone", "username"):
            if (getattr(self, field) or "").strip():
                provided.append(field)
            else:
                # Whitespace-only counts as absent
                setattr(self, field, None)
        if len(provided) != 1:
            raise ValueError("Provide exactly one of identifier, email, phone, username")
        return self

    def to_identifier(self) -> LoginIdentifier:
        if self.email:
            return LoginIdentifier(kind=IdentifierKind.email, value=self.email)
        if self.phone:
            return LoginIdentifier(kind=IdentifierKind.phone, value=self.phone)
        if self.username:
            return LoginIdentifier(kind=IdentifierKind.username, value=self.username)
        return LoginIdentifier(kind=IdentifierKind.any, value=self.identifier)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    components: AuthComponents = Depends(get_auth_components),
):
    """
    Password Login

    Role decides the outcome:
    - direct-token roles receive access_token (requires_otp=false)
    - OTP roles receive pending_id (requires_otp=true) and a code is sent

    Raises:
        - 401 Unauthorized: AUTHENTICATION_FAILED (any credential failure)
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, components)
    result = await use_case.execute(request.to_identifier(), request.password)

    if result.is_err():
        raise authentication_error(result.error)

    return result.value


class VerifyOtpRequest(BaseModel):
    """Verify OTP HTTP request payload"""

    pending_id: UUID = Field(..., description="Challenge handle from /auth/login")
    code: str = Field(..., min_length=1, max_length=12, description="One-time code")


@router.post("/verify-otp", status_code=status.HTTP_200_OK, response_model=TokenResponse)
async def verify_otp(
    request: VerifyOtpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    components: AuthComponents = Depends(get_auth_components),
):
    """
    OTP Verification

    Completes an OTP challenge and returns the access token.
    A challenge can be completed once; replays fail.

    Raises:
        - 401 Unauthorized: AUTHENTICATION_FAILED (wrong, expired or used code)
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyOtpUseCase(uow, components)
    result = await use_case.execute(request.pending_id, request.code)

    if result.is_err():
        raise authentication_error(result.error)

    return result.value


class ResendOtpRequest(BaseModel):
    """Resend OTP HTTP request payload"""

    pending_id: UUID = Field(..., description="Challenge handle from /auth/login")


@router.post("/resend-otp", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def resend_otp(
    request: ResendOtpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    components: AuthComponents = Depends(get_auth_components),
):
    """
    Resend OTP

    Sends a new code and returns a new pending_id; the old one stops working.
    Rate limiting should be applied at middleware layer.

    Raises:
        - 401 Unauthorized: AUTHENTICATION_FAILED (unknown or used challenge)
        - 500 Internal Server Error: Server error
    """
    use_case = ResendOtpUseCase(uow, components)
    result = await use_case.execute(request.pending_id)

    if result.is_err():
        raise authentication_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the presented access token.

    Raises:
        - 401 Unauthorized: SESSION_INVALID / SESSION_EXPIRED
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(session)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def me(session: Session = Depends(get_current_session)):
    """
    Current Session

    Raises:
        - 401 Unauthorized: SESSION_INVALID / SESSION_EXPIRED
    """
    return SessionInfo(
        identity_id=str(session.identity_id),
        role=session.role.value,
        building_id=session.building_id,
        token_id=session.token_id,
        issued_at=session.issued_at,
        expires_at=session.expires_at,
    )
