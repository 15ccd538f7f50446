"""
Client management service
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete
from typing import List
from uuid import UUID
import structlog

from models.client import Client
from schemas.client import ClientCreate, ClientUpdate
from core.exceptions import ConflictError, NotFoundError

logger = structlog.get_logger()

class ClientService:
    """Service for client CRUD operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_clients(self) -> List[Client]:
        result = await self.db.execute(select(Client).order_by(Client.created_at.desc()))
        return list(result.scalars().all())

    async def get_client(self, client_id: UUID) -> Client:
        client = await self.db.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client not found", error_code="CLIENT_NOT_FOUND")
        return client

    async def create_client(self, client_data: ClientCreate) -> Client:
        client = Client(**client_data.model_dump())
        self.db.add(client)
        await self.db.commit()
        await self.db.refresh(client)

        logger.info("Client created", client_id=str(client.id), name=client.name)
        return client

    async def update_client(self, client_id: UUID, client_data: ClientUpdate) -> Client:
        client = await self.get_client(client_id)

        for field, value in client_data.model_dump(exclude_unset=True).items():
            setattr(client, field, value)

        await self.db.commit()
        await self.db.refresh(client)

        logger.info("Client updated", client_id=str(client_id))
        return client

    async def delete_client(self, client_id: UUID) -> None:
        """
        Delete a client

        Cases and invoices keep a required reference to their client, so a
        client that still owns any is refused with a ConflictError.
        """
        try:
            await self.db.execute(delete(Client).where(Client.id == client_id))
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Client deletion refused", client_id=str(client_id))
            raise ConflictError(
                "Client still has cases or invoices",
                error_code="CLIENT_IN_USE",
                details={"client_id": str(client_id)}
            )

        logger.info("Client deleted", client_id=str(client_id))
