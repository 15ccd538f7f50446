"""
API v1 router configuration
"""

from fastapi import APIRouter
from api.v1.endpoints import auth, users, clients, cases, calendar, billing, tasks, documents, notifications, reports, ai
from schemas.base import ErrorResponse

api_router = APIRouter(responses={
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409)
})

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(cases.router, prefix="/cases", tags=["cases"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(billing.router, prefix="/billing", tags=["billing"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])
