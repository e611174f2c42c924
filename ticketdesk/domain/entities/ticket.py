"""Ticket domain entity"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List


class TicketPriority(str, Enum):
    """Ticket priority levels"""
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    CASUAL = "casual"


class TicketStatus(str, Enum):
    """Ticket workflow status"""
    NEW = "new"
    IN_PROGRESS = "in-progress"
    PAUSED = "paused"
    COMPLETED = "completed"


# Moves allowed when strict transitions are switched on
STATUS_TRANSITIONS = {
    TicketStatus.NEW: {TicketStatus.IN_PROGRESS},
    TicketStatus.IN_PROGRESS: {TicketStatus.PAUSED, TicketStatus.COMPLETED},
    TicketStatus.PAUSED: {TicketStatus.IN_PROGRESS, TicketStatus.COMPLETED},
    TicketStatus.COMPLETED: {TicketStatus.IN_PROGRESS},
}


class LogAction(str, Enum):
    """Standard audit log actions"""
    CREATED = "Ticket Created"
    UPDATED = "Ticket Updated"
    RESOLVED = "Ticket Resolved"
    UNRESOLVED = "Ticket Unresolved"


@dataclass
class LogEntry:
    """Audit record attached to a ticket"""
    id: str
    action: str
    user: str
    timestamp: datetime
    details: Optional[str] = None


@dataclass
class Ticket:
    """Ticket domain entity"""
    id: str
    name: str
    subject: str
    message: str
    priority: TicketPriority
    status: TicketStatus
    department_id: str
    created_by: str
    phone: str = ""
    email: str = ""
    company_section: str = ""
    source: str = ""
    date_filed: Optional[datetime] = None
    recommendation: Optional[str] = None
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    assigned_user_id: Optional[str] = None
    auto_email: bool = True
    updated_at: Optional[datetime] = None
    log_trail: List[LogEntry] = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = datetime.now(timezone.utc)
        if self.date_filed is None:
            self.date_filed = self.updated_at
        if self.log_trail is None:
            self.log_trail = []
