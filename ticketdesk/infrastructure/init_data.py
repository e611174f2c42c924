"""Seed records restored on first start and on reset.

Every seeded account shares ``settings.DEFAULT_PASSWORD``.
"""
from datetime import datetime, timezone
from ticketdesk.domain.entities.department import Department
from ticketdesk.domain.entities.ticket import (
    LogAction,
    LogEntry,
    Ticket,
    TicketPriority,
    TicketStatus,
)
from ticketdesk.domain.entities.user import User, UserRole
from ticketdesk.domain.repositories.department_repository import DepartmentRepository
from ticketdesk.domain.repositories.ticket_repository import TicketRepository
from ticketdesk.domain.repositories.user_repository import UserRepository

DEFAULT_ADMIN_EMAIL = "admin@company.com"

DEFAULT_DEPARTMENTS = [
    ("1", "Technical Support", "Handles all technical issues and support requests."),
    ("2", "Customer Service", "Manages customer inquiries, feedback, and general support."),
    ("3", "Sales", "Responsible for new client acquisition and sales operations."),
]

DEFAULT_USERS = [
    ("1", "Admin User", DEFAULT_ADMIN_EMAIL, UserRole.ADMIN, None),
    ("2", "Sub Admin", "subadmin@company.com", UserRole.SUB_ADMIN, "1"),
    ("3", "John Doe", "john@company.com", UserRole.USER, "1"),
    ("4", "Jane Smith", "jane@company.com", UserRole.USER, "2"),
]


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def default_tickets() -> list:
    """Fresh copies of the seeded tickets"""
    return [
        Ticket(
            id="1",
            name="John Customer",
            phone="+1234567890",
            email="john.customer@email.com",
            company_section="Sales",
            source="Email",
            date_filed=_at("2024-01-15T10:30:00"),
            subject="Login Issues",
            message="I'm having trouble logging into my account. The password reset doesn't seem to work.",
            priority=TicketPriority.HIGH,
            status=TicketStatus.NEW,
            department_id="1",
            auto_email=True,
            created_by="1",
            updated_at=_at("2024-01-15T10:30:00"),
            log_trail=[
                LogEntry(
                    id="1",
                    action=LogAction.CREATED.value,
                    user="Admin User",
                    timestamp=_at("2024-01-15T10:30:00"),
                )
            ],
        ),
        Ticket(
            id="2",
            name="Jane Smith",
            phone="+1987654321",
            email="jane.smith@email.com",
            company_section="Support",
            source="Phone",
            date_filed=_at("2024-01-16T14:20:00"),
            subject="Billing Question",
            message="I have a question about my recent invoice. There seems to be an extra charge.",
            priority=TicketPriority.MEDIUM,
            status=TicketStatus.IN_PROGRESS,
            department_id="2",
            auto_email=False,
            created_by="1",
            updated_at=_at("2024-01-16T14:20:00"),
            log_trail=[
                LogEntry(
                    id="1",
                    action=LogAction.CREATED.value,
                    user="Admin User",
                    timestamp=_at("2024-01-16T14:20:00"),
                )
            ],
        ),
    ]


async def init_default_data(
    user_repository: UserRepository,
    department_repository: DepartmentRepository,
    ticket_repository: TicketRepository,
    default_password: str,
) -> None:
    """Create the seed departments, users and tickets in empty repositories"""
    for department_id, name, description in DEFAULT_DEPARTMENTS:
        await department_repository.create(
            Department(id=department_id, name=name, description=description)
        )

    for user_id, name, email, role, department_id in DEFAULT_USERS:
        await user_repository.create(
            User(id=user_id, name=name, email=email, role=role, department_id=department_id),
            default_password,
        )

    for ticket in default_tickets():
        await ticket_repository.create(ticket)
