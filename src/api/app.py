import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from src.adapter.memory import InMemoryStore
from src.adapter.services.otp_delivery import LoggingOtpDelivery
from src.app.services.auth_components import AuthComponents
from src.app.services.otp_challenge_manager import OtpSettings
from src.app.services.otp_delivery import IOtpDelivery
from src.app.services.role_policy import RolePolicy
from src.app.services.session_issuer import SessionIssuer
from .error import ClientError, ServerError
from .utils.jwt import JoseTokenSigner

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_auth_components(
    ApplicationConfig, otp_delivery: Optional[IOtpDelivery] = None
) -> AuthComponents:
    """
    Build the process-wide auth collaborators.

    Raises:
        SigningUnavailable: JWT_SECRET missing or algorithm unsupported
        ValueError: invalid OTP settings or unknown role in OTP_REQUIRED_ROLES
    """
    signer = JoseTokenSigner(ApplicationConfig.JWT_SECRET, ApplicationConfig.JWT_ALGORITHM)
    session_issuer = SessionIssuer(
        signer, ttl=timedelta(minutes=ApplicationConfig.JWT_EXPIRES_MINUTES)
    )
    role_policy = RolePolicy.from_required_roles(ApplicationConfig.OTP_REQUIRED_ROLES)
    otp_settings = OtpSettings(
        code_length=ApplicationConfig.OTP_LENGTH,
        ttl=timedelta(seconds=ApplicationConfig.OTP_TTL_SECONDS),
        max_attempts=ApplicationConfig.OTP_MAX_ATTEMPTS,
    )
    logger.info(f"OTP requirement by role: {role_policy.describe()}")

    return AuthComponents(
        role_policy=role_policy,
        session_issuer=session_issuer,
        otp_delivery=otp_delivery or LoggingOtpDelivery(ApplicationConfig.OTP_LOG_CODES),
        otp_settings=otp_settings,
    )


def create_app(ApplicationConfig, otp_delivery: Optional[IOtpDelivery] = None) -> FastAPI:
    # Fails here, before any route exists, when signing is not configured
    auth = build_auth_components(ApplicationConfig, otp_delivery)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.STORAGE_BACKEND == "sql" and ApplicationConfig.DB_CREATE_ALL:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(title="Building Access API", version="0.1.0", lifespan=lifespan)
    app.state.auth = auth
    app.state.memory_store = (
        InMemoryStore() if ApplicationConfig.STORAGE_BACKEND == "memory" else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth as auth_routes, buildings, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth_routes.router, tags=["Authentication"])
    app.include_router(buildings.router, tags=["Buildings"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
