"""
Case management service with CRUD operations and court sessions
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
from typing import List
from uuid import UUID
import structlog

from models.case import Case, CaseSession
from models.client import Client
from models.user import User
from schemas.case import CaseCreate, CaseUpdate, CaseSessionCreate
from core.exceptions import NotFoundError

logger = structlog.get_logger()

class CaseService:
    """Service for case management operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _case_query(self):
        return (
            select(Case)
            .options(selectinload(Case.client), selectinload(Case.sessions))
            .execution_options(populate_existing=True)
        )

    async def _require_client(self, client_id: UUID) -> Client:
        client = await self.db.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client not found", error_code="CLIENT_NOT_FOUND")
        return client

    async def list_cases(self) -> List[Case]:
        result = await self.db.execute(self._case_query().order_by(Case.created_at.desc()))
        return list(result.scalars().all())

    async def get_case(self, case_id: UUID) -> Case:
        """
        Get a case by ID with its client and sessions

        Raises:
            NotFoundError: If the case does not exist
        """
        result = await self.db.execute(self._case_query().where(Case.id == case_id))
        case = result.scalar_one_or_none()
        if case is None:
            raise NotFoundError("Case not found", error_code="CASE_NOT_FOUND")
        return case

    async def create_case(self, case_data: CaseCreate) -> Case:
        """
        Create a new case

        The client must exist. An unknown responsible lawyer is dropped
        rather than rejected.
        """
        await self._require_client(case_data.client_id)

        values = case_data.model_dump()
        lawyer_id = values.pop("responsible_lawyer_id")
        if lawyer_id is not None and await self.db.get(User, lawyer_id) is None:
            logger.info("Responsible lawyer not found, leaving unassigned", lawyer_id=str(lawyer_id))
            lawyer_id = None

        case = Case(**values, responsible_lawyer_id=lawyer_id)
        self.db.add(case)
        await self.db.commit()

        logger.info("Case created", case_id=str(case.id), case_number=case.case_number)
        return await self.get_case(case.id)

    async def update_case(self, case_id: UUID, case_data: CaseUpdate) -> Case:
        case = await self.get_case(case_id)
        update_data = case_data.model_dump(exclude_unset=True)

        if "client_id" in update_data:
            await self._require_client(update_data["client_id"])

        if update_data.get("responsible_lawyer_id") is not None:
            if await self.db.get(User, update_data["responsible_lawyer_id"]) is None:
                update_data.pop("responsible_lawyer_id")

        for field, value in update_data.items():
            setattr(case, field, value)

        await self.db.commit()

        logger.info("Case updated", case_id=str(case_id), fields=sorted(update_data))
        return await self.get_case(case_id)

    async def delete_case(self, case_id: UUID) -> None:
        """Delete a case; its sessions go with it"""
        await self.db.execute(delete(Case).where(Case.id == case_id))
        await self.db.commit()
        logger.info("Case deleted", case_id=str(case_id))

    async def list_sessions(self, case_id: UUID) -> List[CaseSession]:
        case = await self.get_case(case_id)
        return list(case.sessions)

    async def add_session(self, case_id: UUID, session_data: CaseSessionCreate) -> CaseSession:
        case = await self.get_case(case_id)

        session = CaseSession(case_id=case.id, **session_data.model_dump())
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)

        logger.info("Case session scheduled", case_id=str(case_id), session_id=str(session.id))
        return session
