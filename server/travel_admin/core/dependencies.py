"""FastAPI dependencies for database sessions, the object store and admin auth."""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ..services.admin_service import AdminCredentialStore, AuthService
from ..services.object_store import get_object_store
from .database import get_async_session
from .exceptions import AuthenticationError
from .security import decode_access_token


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database dependency that provides async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async for session in get_async_session():
        yield session


def get_credential_store(db: AsyncSession = Depends(get_db)) -> AdminCredentialStore:
    return AdminCredentialStore(db)


def get_auth_service(credentials: AdminCredentialStore = Depends(get_credential_store)) -> AuthService:
    return AuthService(credentials)


async def get_current_admin(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> str:
    """
    Authentication dependency that validates the admin bearer token.

    Returns:
        str: Admin id carried by the token

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if not authorization:
        raise AuthenticationError(detail="Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(detail="Invalid authorization header format")

    return decode_access_token(token.strip())


RequiredAuth = Depends(get_current_admin)
DatabaseSession = Depends(get_db)
ObjectStoreClient = Depends(get_object_store)
