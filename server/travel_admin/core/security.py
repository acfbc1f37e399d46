"""Session token signing and password hashing for the admin account."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from jwt import PyJWTError

from .config import settings
from .exceptions import AuthenticationError, ValidationError

ALGORITHM = "HS256"

# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


def create_access_token(admin_id: str, ttl_seconds: int | None = None) -> str:
    """Sign a session token whose only claim besides expiry is the admin id."""
    ttl = settings.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    payload = {"sub": admin_id, "exp": expires_at}
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Validate a session token and return the admin id it carries.

    Raises:
        AuthenticationError: If the token is expired, tampered with or has no subject
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(detail="Token has expired")
    except PyJWTError as e:
        raise AuthenticationError(detail=f"Token validation failed: {e}")

    admin_id = payload.get("sub")
    if not admin_id:
        raise AuthenticationError(detail="Invalid token payload")
    return admin_id


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh salt.

    Raises:
        ValidationError: If the password is longer than bcrypt accepts (72 bytes UTF-8)
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(detail=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
