"""
Authentication: password hashing, JWT issuing and the bearer-token dependency
"""

from datetime import datetime, timedelta, UTC
from typing import Optional, Dict, Any
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
import structlog

from core.config import settings
from core.exceptions import AuthenticationError

logger = structlog.get_logger()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Missing headers are reported as 401 by get_current_user, not 403 by the scheme
security = HTTPBearer(auto_error=False)

class AuthService:
    """Stateless token and password helpers"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password"""
        return pwd_context.hash(password)

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """Create JWT access token"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.now(UTC) + expires_delta
        else:
            expire = datetime.now(UTC) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    async def verify_token(token: str) -> Dict[str, Any]:
        """Verify and decode a JWT access token"""
        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError as e:
            logger.warning("Token verification failed", error=str(e))
            raise AuthenticationError("Could not validate credentials", error_code="INVALID_TOKEN")

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Dict[str, Any]:
    """Get current authenticated user from the bearer token"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated", error_code="MISSING_TOKEN")

    payload = await AuthService.verify_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError("Could not validate credentials", error_code="INVALID_TOKEN")

    return {
        "id": user_id,
        "email": payload.get("email"),
        "role": payload.get("role"),
    }
