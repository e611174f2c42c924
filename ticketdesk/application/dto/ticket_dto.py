"""Ticket DTOs"""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field
from ticketdesk.domain.entities.ticket import (
    TicketPriority,
    TicketStatus,
)


class LogEntryCreateDTO(BaseModel):
    """DTO for a caller supplied log entry"""
    action: str = Field(min_length=1)
    user: str
    details: Optional[str] = None


class LogEntryResponseDTO(BaseModel):
    """DTO for log entry response"""
    id: str
    action: str
    user: str
    timestamp: datetime
    details: Optional[str] = None

    model_config = {"from_attributes": True}


class TicketCreateDTO(BaseModel):
    """DTO for creating a ticket"""
    name: str
    phone: str = ""
    email: str = ""
    company_section: str = ""
    source: str = ""
    date_filed: Optional[datetime] = None
    subject: str = Field(min_length=1)
    message: str
    recommendation: Optional[str] = None
    priority: TicketPriority = TicketPriority.MEDIUM
    status: TicketStatus = TicketStatus.NEW
    department_id: str
    assigned_user_id: Optional[str] = None
    auto_email: bool = True


class TicketUpdateDTO(BaseModel):
    """DTO for updating a ticket.

    Only fields explicitly set are applied and reported in the log entry.
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    company_section: Optional[str] = None
    source: Optional[str] = None
    date_filed: Optional[datetime] = None
    subject: Optional[str] = Field(default=None, min_length=1)
    message: Optional[str] = None
    recommendation: Optional[str] = None
    priority: Optional[TicketPriority] = None
    status: Optional[TicketStatus] = None
    department_id: Optional[str] = None
    assigned_user_id: Optional[str] = None
    auto_email: Optional[bool] = None


class TicketFilterDTO(BaseModel):
    """Criteria for ticket listing and search"""
    search: Optional[str] = None
    date_filed: Optional[date] = None
    department_id: Optional[str] = None
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None

    def is_empty(self) -> bool:
        return (
            not (self.search or "").strip()
            and self.date_filed is None
            and self.department_id is None
            and self.status is None
            and self.priority is None
        )


class TicketStatsDTO(BaseModel):
    """Ticket counts by status"""
    total: int = 0
    new: int = 0
    in_progress: int = 0
    paused: int = 0
    completed: int = 0


class TicketResponseDTO(BaseModel):
    """DTO for ticket response"""
    id: str
    name: str
    phone: str
    email: str
    company_section: str
    source: str
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
    department_name: Optional[str] = None
    assigned_user_id: Optional[str] = None
    assigned_user_name: Optional[str] = None
    auto_email: bool
    created_by: str
    created_by_name: Optional[str] = None
    updated_at: datetime
    log_trail: List[LogEntryResponseDTO] = []

    model_config = {"from_attributes": True}
