"""
Property-based tests for case management
"""

import pytest
from hypothesis import given, strategies as st, settings
import sys
import os
import asyncio
from datetime import datetime, timedelta, UTC
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Add backend to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from pydantic import ValidationError

import models  # noqa: F401
from models.case import Case, CaseSession, CaseType, CaseStatus, CaseStage
from models.client import Client
from models.user import User
from schemas.case import CaseCreate, CaseUpdate, CaseSessionCreate
from services.case_service import CaseService
from core.exceptions import NotFoundError

# Test data strategies
@st.composite
def case_payloads(draw):
    """Generate case creation payloads with enum names in any letter case"""
    def any_case(member):
        name = member.value
        return draw(st.sampled_from([name, name.lower(), name.title()]))

    return {
        'case_number': draw(st.from_regex(r'[0-9]{4}/[0-9]{4}', fullmatch=True)),
        'title': draw(st.text(min_size=1, max_size=50)),
        'type': any_case(draw(st.sampled_from(list(CaseType)))),
        'stage': any_case(draw(st.sampled_from(list(CaseStage)))),
        'status': any_case(draw(st.sampled_from(list(CaseStatus)))),
        'client_id': str(uuid4()),
    }

class TestCaseSchemas:
    """Property tests for case payload validation"""

    @given(payload=case_payloads())
    @settings(deadline=1000, max_examples=50)
    def test_enum_values_are_case_insensitive(self, payload):
        case_data = CaseCreate(**payload)

        assert case_data.type.value == payload['type'].upper()
        assert case_data.stage.value == payload['stage'].upper()
        assert case_data.status.value == payload['status'].upper()

    def test_defaults(self):
        case_data = CaseCreate(case_number="2026/0002", client_id=uuid4())

        assert case_data.type == CaseType.OTHER
        assert case_data.stage == CaseStage.PRE_TRIAL
        assert case_data.status == CaseStatus.OPEN
        assert case_data.responsible_lawyer_id is None

    def test_empty_case_number_rejected(self):
        with pytest.raises(ValidationError):
            CaseCreate(case_number="", client_id=uuid4())

    def test_update_leaves_unset_fields_out(self):
        update = CaseUpdate(status="closed")
        assert update.model_dump(exclude_unset=True) == {"status": CaseStatus.CLOSED}

    def test_update_rejects_null_for_required_column(self):
        with pytest.raises(ValidationError):
            CaseUpdate(client_id=None)

    def test_update_accepts_null_for_optional_column(self):
        update = CaseUpdate(responsible_lawyer_id=None)
        assert update.model_dump(exclude_unset=True) == {"responsible_lawyer_id": None}

class TestCaseService:
    """Case operations with a mocked session"""

    def setup_method(self):
        self.mock_db = AsyncMock()
        self.mock_db.add = MagicMock()
        self.case_service = CaseService(self.mock_db)

    def _reload_returns_added(self):
        """Make get_case return whatever was last added to the session"""
        result = MagicMock()
        result.scalar_one_or_none.side_effect = lambda: self.mock_db.add.call_args.args[0]
        self.mock_db.execute = AsyncMock(return_value=result)

    def test_create_case_requires_client(self):
        self.mock_db.get = AsyncMock(return_value=None)
        case_data = CaseCreate(case_number="2026/0003", client_id=uuid4())

        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(self.case_service.create_case(case_data))

        assert exc_info.value.error_code == "CLIENT_NOT_FOUND"
        self.mock_db.add.assert_not_called()

    def test_unknown_lawyer_is_left_unassigned(self):
        client = Client(id=uuid4(), name="Client")

        async def lookup(model, _id):
            return client if model is Client else None

        self.mock_db.get = AsyncMock(side_effect=lookup)
        self._reload_returns_added()
        case_data = CaseCreate(
            case_number="2026/0004",
            type="labor",
            client_id=client.id,
            responsible_lawyer_id=uuid4(),
        )

        case = asyncio.run(self.case_service.create_case(case_data))

        assert isinstance(case, Case)
        assert case.responsible_lawyer_id is None
        assert case.client_id == client.id
        assert case.type == CaseType.LABOR
        self.mock_db.commit.assert_awaited_once()

    def test_known_lawyer_is_kept(self):
        lawyer_id = uuid4()
        self.mock_db.get = AsyncMock(return_value=SimpleNamespace(id=lawyer_id))
        self._reload_returns_added()
        case_data = CaseCreate(case_number="2026/0005", client_id=uuid4(), responsible_lawyer_id=lawyer_id)

        case = asyncio.run(self.case_service.create_case(case_data))

        assert case.responsible_lawyer_id == lawyer_id

    def test_get_missing_case(self):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        self.mock_db.execute = AsyncMock(return_value=result)

        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(self.case_service.get_case(uuid4()))
        assert exc_info.value.message == "Case not found"

    def test_update_ignores_unknown_lawyer(self):
        existing_lawyer = uuid4()
        case = Case(id=uuid4(), case_number="2026/0006", client_id=uuid4(), responsible_lawyer_id=existing_lawyer)
        result = MagicMock()
        result.scalar_one_or_none.return_value = case
        self.mock_db.execute = AsyncMock(return_value=result)

        async def lookup(model, _id):
            return None if model is User else SimpleNamespace(id=_id)

        self.mock_db.get = AsyncMock(side_effect=lookup)

        updated = asyncio.run(self.case_service.update_case(
            case.id,
            CaseUpdate(responsible_lawyer_id=uuid4(), court="Labor Court"),
        ))

        assert updated.responsible_lawyer_id == existing_lawyer
        assert updated.court == "Labor Court"

    def test_add_session_to_case(self):
        case = Case(id=uuid4(), case_number="2026/0007", client_id=uuid4())
        result = MagicMock()
        result.scalar_one_or_none.return_value = case
        self.mock_db.execute = AsyncMock(return_value=result)
        when = datetime.now(UTC) + timedelta(days=3)

        session = asyncio.run(self.case_service.add_session(
            case.id,
            CaseSessionCreate(date=when, location="Hall 2"),
        ))

        assert isinstance(session, CaseSession)
        assert session.case_id == case.id
        assert session.date == when
        self.mock_db.add.assert_called_once_with(session)

    def test_delete_case_issues_delete_and_commits(self):
        case_id = uuid4()

        asyncio.run(self.case_service.delete_case(case_id))

        self.mock_db.execute.assert_awaited_once()
        statement = self.mock_db.execute.call_args.args[0]
        assert statement.is_delete
        assert statement.table is Case.__table__
        self.mock_db.commit.assert_awaited_once()

class TestCaseSessionCascade:
    """Sessions are removed together with their case"""

    def test_session_foreign_key_cascades_on_delete(self):
        foreign_keys = list(CaseSession.__table__.c.case_id.foreign_keys)

        assert len(foreign_keys) == 1
        assert foreign_keys[0].column is Case.__table__.c.id
        assert foreign_keys[0].ondelete == "CASCADE"

    def test_sessions_relationship_deletes_orphans(self):
        sessions = Case.__mapper__.relationships["sessions"]

        assert sessions.cascade.delete
        assert sessions.cascade.delete_orphan
        assert sessions.passive_deletes is True
