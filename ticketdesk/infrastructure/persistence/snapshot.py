"""Serialized form of the whole store state"""
import logging
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ValidationError
from ticketdesk.domain.entities.department import Department
from ticketdesk.domain.entities.ticket import LogEntry, Ticket, TicketPriority, TicketStatus
from ticketdesk.domain.entities.user import User, UserRole

logger = logging.getLogger(__name__)


class LogEntryRecord(BaseModel):
    id: str
    action: str
    user: str
    timestamp: datetime
    details: Optional[str] = None


class TicketRecord(BaseModel):
    id: str
    name: str
    phone: str = ""
    email: str = ""
    company_section: str = ""
    source: str = ""
    date_filed: datetime
    subject: str
    message: str
    recommendation: Optional[str] = None
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    priority: TicketPriority
    status: TicketStatus
    department_id: str
    assigned_user_id: Optional[str] = None
    auto_email: bool = True
    created_by: str
    updated_at: datetime
    log_trail: List[LogEntryRecord] = []


class UserRecord(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    department_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    password_hash: str


class DepartmentRecord(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime


class StoreState(BaseModel):
    """Session user id plus the three collections"""
    user: Optional[str] = None
    tickets: List[TicketRecord] = []
    departments: List[DepartmentRecord] = []
    users: List[UserRecord] = []


class StoreSnapshot(BaseModel):
    version: int
    state: StoreState


def ticket_to_record(ticket: Ticket) -> TicketRecord:
    return TicketRecord.model_validate(asdict(ticket))


def record_to_ticket(record: TicketRecord) -> Ticket:
    return Ticket(
        **record.model_dump(exclude={"log_trail"}),
        log_trail=[LogEntry(**entry.model_dump()) for entry in record.log_trail],
    )


def user_to_record(user: User, password_hash: str) -> UserRecord:
    return UserRecord.model_validate({**asdict(user), "password_hash": password_hash})


def record_to_user(record: UserRecord) -> User:
    return User(**record.model_dump(exclude={"password_hash"}))


def department_to_record(department: Department) -> DepartmentRecord:
    return DepartmentRecord.model_validate(asdict(department))


def record_to_department(record: DepartmentRecord) -> Department:
    return Department(**record.model_dump())


def parse_snapshot(raw: Optional[str], expected_version: int) -> Optional[StoreSnapshot]:
    """Decode a persisted snapshot.

    Returns None when nothing is stored, the payload is unreadable, or it was
    written under another schema version.
    """
    if raw is None:
        return None
    try:
        snapshot = StoreSnapshot.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Discarding unreadable store snapshot: %s", e.error_count())
        return None
    if snapshot.version != expected_version:
        logger.warning(
            "Discarding store snapshot with version %s (expected %s)",
            snapshot.version,
            expected_version,
        )
        return None
    return snapshot
