"""Security utilities for JWT and password handling."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.database import get_db
from queuedesk.models.user import User
from queuedesk.repositories.user_repository import UserRepository
from queuedesk.schemas.auth import TokenPayload
from queuedesk.services.errors import UnauthorizedError

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
# Missing credentials are reported as 401 by get_current_user
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)


def create_access_token(
    user_id: int,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create JWT access token."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate JWT access token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )

        return TokenPayload(
            sub=int(payload["sub"]),
            email=payload["email"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (JWTError, KeyError, ValueError):
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the caller identity from the bearer token."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        raise UnauthorizedError("Could not validate credentials")

    if token_data.exp < datetime.now(timezone.utc):
        raise UnauthorizedError("Token has expired")

    user = await UserRepository(db).get(token_data.sub)

    if user is None or not user.is_active:
        raise UnauthorizedError("Could not validate credentials")

    return user
