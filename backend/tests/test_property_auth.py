"""
Property-based tests for authentication and lawyer accounts
"""

import pytest
from hypothesis import given, strategies as st, settings
import sys
import os
import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Add backend to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt
from pydantic import ValidationError

import models  # noqa: F401
from core.auth import AuthService, get_current_user
from core.config import settings as app_settings
from core.exceptions import AuthenticationError, ConflictError
from models.user import User, UserRole
from schemas.user import RegisterLawyerRequest
from services.user_service import UserService

# Test data strategies
@st.composite
def token_claims(draw):
    """Generate token claims for testing"""
    return {
        'sub': str(draw(st.uuids())),
        'email': draw(st.from_regex(r'[a-z]{3,10}@lawfirm\.com', fullmatch=True)),
        'role': draw(st.sampled_from([role.value for role in UserRole])),
    }

@st.composite
def valid_passwords(draw):
    """Generate passwords bcrypt can hash without truncation"""
    return draw(st.text(min_size=6, max_size=16, alphabet=st.characters(blacklist_characters='\x00', blacklist_categories=('Cs',))))

def bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

class TestTokens:
    """Property tests for access tokens"""

    @given(claims=token_claims())
    @settings(deadline=1000, max_examples=30)
    def test_token_round_trip_preserves_claims(self, claims):
        token = AuthService.create_access_token(claims)
        decoded = asyncio.run(AuthService.verify_token(token))

        assert decoded['sub'] == claims['sub']
        assert decoded['email'] == claims['email']
        assert decoded['role'] == claims['role']
        assert 'exp' in decoded

    @given(claims=token_claims())
    @settings(deadline=1000, max_examples=20)
    def test_current_user_from_token(self, claims):
        token = AuthService.create_access_token(claims)
        current_user = asyncio.run(get_current_user(bearer(token)))

        assert current_user == {"id": claims['sub'], "email": claims['email'], "role": claims['role']}

    def test_expired_token_is_rejected(self):
        token = AuthService.create_access_token({'sub': str(uuid4())}, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationError) as exc_info:
            asyncio.run(AuthService.verify_token(token))
        assert exc_info.value.error_code == "INVALID_TOKEN"

    def test_tampered_token_is_rejected(self):
        forged = jwt.encode({'sub': str(uuid4())}, "some-other-key", algorithm=app_settings.ALGORITHM)

        with pytest.raises(AuthenticationError):
            asyncio.run(get_current_user(bearer(forged)))

    def test_missing_credentials(self):
        with pytest.raises(AuthenticationError) as exc_info:
            asyncio.run(get_current_user(None))
        assert exc_info.value.error_code == "MISSING_TOKEN"

    def test_token_without_subject(self):
        token = AuthService.create_access_token({'email': 'nobody@lawfirm.com'})

        with pytest.raises(AuthenticationError):
            asyncio.run(get_current_user(bearer(token)))

class TestPasswordHashing:
    """Property tests for password hashing"""

    @given(password=valid_passwords())
    @settings(deadline=None, max_examples=5)
    def test_hash_verifies_only_the_original(self, password):
        hashed = AuthService.get_password_hash(password)

        assert hashed != password
        assert AuthService.verify_password(password, hashed)
        assert not AuthService.verify_password(password + "x", hashed)

class TestRegisterLawyerRequest:
    """Validation of the registration payload"""

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            RegisterLawyerRequest(email="a@lawfirm.com", full_name="A Lawyer", password="123")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            RegisterLawyerRequest(email="a@lawfirm.com", full_name="   ", password="secret123")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            RegisterLawyerRequest(email="not-an-email", full_name="A Lawyer", password="secret123")

class TestUserService:
    """Account operations with a mocked session"""

    def setup_method(self):
        self.mock_db = AsyncMock()
        self.mock_db.add = MagicMock()
        self.user_service = UserService(self.mock_db)
        self.request = RegisterLawyerRequest(
            email="New.Lawyer@LawFirm.com",
            full_name="New Lawyer",
            password="secret123",
        )

    def _lookup_returns(self, user):
        result = MagicMock()
        result.scalar_one_or_none.return_value = user
        self.mock_db.execute = AsyncMock(return_value=result)

    def test_register_then_duplicate(self):
        self._lookup_returns(None)
        user = asyncio.run(self.user_service.register_lawyer(self.request))

        assert user.email == "new.lawyer@lawfirm.com"
        assert user.role == UserRole.LAWYER
        assert user.password_hash != "secret123"
        assert AuthService.verify_password("secret123", user.password_hash)
        self.mock_db.commit.assert_awaited_once()

        self._lookup_returns(user)
        with pytest.raises(ConflictError) as exc_info:
            asyncio.run(self.user_service.register_lawyer(self.request))
        assert exc_info.value.error_code == "EMAIL_EXISTS"
        assert self.mock_db.add.call_count == 1

    def test_login_with_wrong_password(self):
        user = User(
            id=uuid4(),
            email="lawyer@lawfirm.com",
            full_name="Lawyer",
            password_hash=AuthService.get_password_hash("secret123"),
            role=UserRole.LAWYER,
        )
        self._lookup_returns(user)

        with pytest.raises(AuthenticationError) as exc_info:
            asyncio.run(self.user_service.login("lawyer@lawfirm.com", "wrong-password"))
        assert exc_info.value.message == "Invalid credentials"

    def test_login_with_unknown_email(self):
        self._lookup_returns(None)

        with pytest.raises(AuthenticationError):
            asyncio.run(self.user_service.login("ghost@lawfirm.com", "secret123"))

    def test_login_issues_token_for_user(self):
        user = User(
            id=uuid4(),
            email="lawyer@lawfirm.com",
            full_name="Lawyer",
            password_hash=AuthService.get_password_hash("secret123"),
            role=UserRole.LAWYER,
        )
        self._lookup_returns(user)

        token, logged_in = asyncio.run(self.user_service.login("lawyer@lawfirm.com", "secret123"))
        claims = asyncio.run(AuthService.verify_token(token))

        assert logged_in is user
        assert claims['sub'] == str(user.id)
        assert claims['role'] == "LAWYER"
