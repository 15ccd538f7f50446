import asyncio
import sys
import os
from datetime import datetime, timedelta, UTC

# Add current directory to path
sys.path.append(os.getcwd())

from sqlalchemy import select

from core.database import engine, AsyncSessionLocal
from core.exceptions import ConflictError
from models.case import Case, CaseSession, CaseType, CaseStage
from models.client import Client, ClientType
from schemas.user import RegisterLawyerRequest
from services.user_service import UserService

FIRST_LAWYER = RegisterLawyerRequest(
    email="admin@lawfirm.com",
    full_name="Lead Lawyer",
    phone="0500000000",
    password="StrongPass123",
)
SAMPLE_CLIENT_NAME = "Sample Trading Co."
SAMPLE_CASE_NUMBER = "2026/0001"

async def seed():
    """Seed a first lawyer, a client and a case; safe to run repeatedly"""
    async with AsyncSessionLocal() as session:
        users = UserService(session)

        print("Ensuring first lawyer...")
        try:
            lawyer = await users.register_lawyer(FIRST_LAWYER)
            print(f"Created {lawyer.email}")
        except ConflictError:
            lawyer = await users.get_user_by_email(FIRST_LAWYER.email)
            print(f"{lawyer.email} already exists")

        print("Ensuring sample client...")
        result = await session.execute(select(Client).where(Client.name == SAMPLE_CLIENT_NAME))
        client = result.scalar_one_or_none()
        if client is None:
            client = Client(
                name=SAMPLE_CLIENT_NAME,
                type=ClientType.COMPANY,
                commercial_registration="1010000000",
                email="contact@sample-trading.example",
                phone="0110000000",
            )
            session.add(client)
            await session.flush()

        print("Ensuring sample case...")
        result = await session.execute(select(Case).where(Case.case_number == SAMPLE_CASE_NUMBER))
        if result.scalar_one_or_none() is None:
            case = Case(
                case_number=SAMPLE_CASE_NUMBER,
                title="Unpaid supply contract",
                type=CaseType.COMMERCIAL,
                stage=CaseStage.FIRST_INSTANCE,
                court="Commercial Court",
                client_id=client.id,
                responsible_lawyer_id=lawyer.id,
            )
            session.add(case)
            await session.flush()
            session.add(CaseSession(
                case_id=case.id,
                date=datetime.now(UTC) + timedelta(days=7),
                location="Hall 3",
            ))

        await session.commit()
        print("Seed complete.")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
