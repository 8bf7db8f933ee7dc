"""
Authentication helpers for the admin dashboard.

Passwords are checked with passlib; sessions are stateless JWT bearer
tokens signed with the configured secret.
"""

from datetime import datetime, timedelta
from typing import Optional
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from modules.auth.models.admin_models import AdminUser

logger = logging.getLogger(__name__)

# bcrypt hashes from the original admin table still verify; new hashes use pbkdf2
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

security = HTTPBearer(auto_error=False)

TOKEN_ISSUER = "kaskroutek-api"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be identified")
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    admin_id: int, username: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token for an admin user."""
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    )
    to_encode = {
        "sub": username,
        "admin_id": admin_id,
        "type": "access",
        "exp": expire,
        "iss": TOKEN_ISSUER,
    }
    return jwt.encode(
        to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> Optional[dict]:
    """Decode a token, returning None for anything invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=TOKEN_ISSUER,
        )
    except JWTError as e:
        logger.info(f"Rejected access token: {str(e)}")
        return None

    if payload.get("type") != "access" or payload.get("admin_id") is None:
        return None
    return payload


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> AdminUser:
    """Resolve the admin user behind the bearer token."""
    if credentials is None:
        raise _credentials_exception()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _credentials_exception()

    admin = db.query(AdminUser).filter(AdminUser.id == payload["admin_id"]).first()
    if admin is None or admin.username != payload.get("sub"):
        raise _credentials_exception()

    return admin
