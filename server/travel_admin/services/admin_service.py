"""Admin credential store and the login / change-password flow built on it."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..core.security import create_access_token, hash_password, verify_password
from ..models.admin import Admin

logger = logging.getLogger(__name__)


class AdminCredentialStore:
    """Reads, verifies and updates the admin credential record."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, admin_id: str) -> Optional[Admin]:
        try:
            key = UUID(str(admin_id))
        except ValueError:
            return None
        return await self.db.get(Admin, key)

    async def get_by_username(self, username: str) -> Optional[Admin]:
        result = await self.db.execute(select(Admin).where(Admin.username == username))
        return result.scalar_one_or_none()

    async def verify(self, username: str, password: str) -> Optional[Admin]:
        """Return the admin when the username exists and the password matches."""
        admin = await self.get_by_username(username)
        if admin is None or not verify_password(password, admin.password_hash):
            return None
        return admin

    async def update_password(self, admin: Admin, new_password: str) -> None:
        admin.password_hash = hash_password(new_password)
        await self.db.commit()

    async def ensure_seeded(self, username: str, password: str) -> bool:
        """Create the admin record when none exists for ``username``. Returns True if created."""
        if await self.get_by_username(username) is not None:
            return False
        self.db.add(Admin(username=username, password_hash=hash_password(password)))
        await self.db.commit()
        logger.info("Default admin created", extra={"username": username})
        return True


class AuthService:
    """Login and password change for the admin account."""

    def __init__(self, credentials: AdminCredentialStore):
        self.credentials = credentials

    async def login(self, username: str, password: str) -> str:
        """
        Exchange valid credentials for a signed session token.

        Raises:
            AuthenticationError: If the username or password does not match
        """
        admin = await self.credentials.verify(username, password)
        if admin is None:
            logger.warning("Admin login rejected", extra={"username": username})
            raise AuthenticationError(detail="Invalid username or password")

        logger.info("Admin logged in", extra={"admin_id": str(admin.id)})
        return create_access_token(str(admin.id))

    async def change_password(self, admin_id: str, old_password: str, new_password: str) -> None:
        """
        Replace the admin password after checking the current one.

        Tokens already issued stay valid until they expire.

        Raises:
            NotFoundError: If the token's admin no longer exists
            ValidationError: If the old password is wrong or the new one is too long for bcrypt
        """
        admin = await self.credentials.get(admin_id)
        if admin is None:
            raise NotFoundError(resource_type="admin", resource_id=admin_id)
        if not verify_password(old_password, admin.password_hash):
            raise ValidationError(detail="Old password is incorrect")

        await self.credentials.update_password(admin, new_password)
        logger.info("Admin password changed", extra={"admin_id": admin_id})
