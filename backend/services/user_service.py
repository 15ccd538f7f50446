"""
User accounts: lawyer registration, credential checks and listing
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from typing import Optional, List, Tuple
import structlog

from models.user import User, UserRole
from schemas.user import RegisterLawyerRequest
from core.auth import AuthService
from core.exceptions import AuthenticationError, ConflictError

logger = structlog.get_logger()

class UserService:
    """Service for user account operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def register_lawyer(self, data: RegisterLawyerRequest) -> User:
        """
        Create a LAWYER account

        Raises:
            ConflictError: If the email is already registered
        """
        email = data.email.lower()
        if await self.get_user_by_email(email) is not None:
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")

        user = User(
            email=email,
            full_name=data.full_name,
            phone=data.phone,
            password_hash=AuthService.get_password_hash(data.password),
            role=UserRole.LAWYER,
        )
        self.db.add(user)

        try:
            await self.db.commit()
        except IntegrityError:
            # Concurrent registration of the same email
            await self.db.rollback()
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")

        await self.db.refresh(user)
        logger.info("Lawyer registered", user_id=str(user.id), email=user.email)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, otherwise raise AuthenticationError"""
        user = await self.get_user_by_email(email)
        if user is None or not AuthService.verify_password(password, user.password_hash):
            logger.warning("Login failed", email=email)
            raise AuthenticationError("Invalid credentials", error_code="INVALID_CREDENTIALS")
        return user

    async def login(self, email: str, password: str) -> Tuple[str, User]:
        """Authenticate and issue an access token"""
        user = await self.authenticate(email, password)
        token = AuthService.create_access_token(
            data={"sub": str(user.id), "email": user.email, "role": user.role.value}
        )
        logger.info("User logged in", user_id=str(user.id))
        return token, user

    async def list_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.full_name))
        return list(result.scalars().all())
