"""
Models package - imports all models for SQLAlchemy
"""

from core.database import Base
from .user import User, UserRole
from .client import Client, ClientType
from .case import Case, CaseSession, CaseStatus, CaseType, CaseStage
from .billing import Invoice, Payment, InvoiceStatus, BillingModel, Currency
from .calendar_event import CalendarEvent, CalendarEventType
from .task import Task, TaskStatus, TaskPriority
from .document import Document, DocumentType
from .notification import Notification, NotificationChannel, NotificationStatus

__all__ = [
    "Base",
    "User", "UserRole",
    "Client", "ClientType",
    "Case", "CaseSession", "CaseStatus", "CaseType", "CaseStage",
    "Invoice", "Payment", "InvoiceStatus", "BillingModel", "Currency",
    "CalendarEvent", "CalendarEventType",
    "Task", "TaskStatus", "TaskPriority",
    "Document", "DocumentType",
    "Notification", "NotificationChannel", "NotificationStatus",
]
