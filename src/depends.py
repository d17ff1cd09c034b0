from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.libs.result import Error
from src.adapter.memory import InMemoryUnitOfWork
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, ServerError
from src.app.services.auth_components import AuthComponents
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuthorizationDecision, Session

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work(request: Request):
    store = getattr(request.app.state, "memory_store", None)
    if store is not None:
        yield InMemoryUnitOfWork(store)
        return

    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_components(request: Request) -> AuthComponents:
    """Process-wide auth collaborators built by create_app()"""
    return request.app.state.auth


def raise_for_auth_error(error: Error):
    """Map session/authorization errors to HTTP; anything else is a server error."""
    if error.code in ("SESSION_INVALID", "SESSION_EXPIRED"):
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    if error.code == "FORBIDDEN":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    components: AuthComponents = Depends(get_auth_components),
) -> Session:
    """
    Dependency to extract and verify the bearer token from Authorization header.

    Returns:
        Session rebuilt from the token (signature, expiry and revocation checked)

    Raises:
        ClientError: 401 SESSION_INVALID / SESSION_EXPIRED
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise ClientError(
            Error("SESSION_INVALID", "Bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    async with uow:
        result = await components.guard(uow).authenticate(credentials.credentials)

    if result.is_err():
        raise_for_auth_error(result.error)

    return result.value


async def require_building_access(
    building_id: str,
    session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    components: AuthComponents = Depends(get_auth_components),
) -> AuthorizationDecision:
    """
    Dependency guarding routes with a {building_id} path parameter.

    Raises:
        ClientError: 401 SESSION_EXPIRED, 403 FORBIDDEN
    """
    result = components.guard(uow).authorize(session, building_id)
    if result.is_err():
        raise_for_auth_error(result.error)
    return result.value
