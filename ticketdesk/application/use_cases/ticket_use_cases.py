"""Ticket use cases"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
from ticketdesk.application.dto.ticket_dto import (
    LogEntryCreateDTO,
    LogEntryResponseDTO,
    TicketCreateDTO,
    TicketFilterDTO,
    TicketResponseDTO,
    TicketStatsDTO,
    TicketUpdateDTO,
)
from ticketdesk.application.permissions import (
    filter_visible_tickets,
    is_valid_status_transition,
)
from ticketdesk.application.results import OperationResult
from ticketdesk.domain.entities.ticket import (
    LogAction,
    LogEntry,
    Ticket,
    TicketStatus,
)
from ticketdesk.domain.entities.user import User
from ticketdesk.domain.repositories.department_repository import DepartmentRepository
from ticketdesk.domain.repositories.ticket_repository import TicketRepository
from ticketdesk.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# Fields an update may set back to None
NULLABLE_FIELDS = {"recommendation", "assigned_user_id"}


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged past previous so updates are strictly ordered"""
    now = datetime.now(timezone.utc)
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class TicketUseCases:
    """Use cases for ticket operations"""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
        strict_status_transitions: bool = False,
    ):
        self.ticket_repository = ticket_repository
        self.user_repository = user_repository
        self.department_repository = department_repository
        self.strict_status_transitions = strict_status_transitions

    async def create_ticket(
        self, ticket_data: TicketCreateDTO, actor: Optional[User]
    ) -> OperationResult[TicketResponseDTO]:
        """Create a new ticket on behalf of the session user"""
        if actor is None:
            return OperationResult.unauthorized()

        problem = await self._check_references(ticket_data.department_id, ticket_data.assigned_user_id)
        if problem:
            return problem

        now = datetime.now(timezone.utc)
        ticket = Ticket(
            id="",
            name=ticket_data.name,
            phone=ticket_data.phone,
            email=ticket_data.email,
            company_section=ticket_data.company_section,
            source=ticket_data.source,
            date_filed=ticket_data.date_filed or now,
            subject=ticket_data.subject,
            message=ticket_data.message,
            recommendation=ticket_data.recommendation,
            priority=ticket_data.priority,
            status=ticket_data.status,
            department_id=ticket_data.department_id,
            assigned_user_id=ticket_data.assigned_user_id,
            auto_email=ticket_data.auto_email,
            created_by=actor.id,
            updated_at=now,
            log_trail=[
                LogEntry(
                    id=str(uuid.uuid4()),
                    action=LogAction.CREATED.value,
                    user=actor.name,
                    timestamp=now,
                )
            ],
        )

        created_ticket = await self.ticket_repository.create(ticket)
        logger.info("Ticket created: %s by %s", created_ticket.id, actor.email)
        return OperationResult.success(await self.ticket_to_dto(created_ticket))

    async def get_ticket(self, ticket_id: str) -> Optional[TicketResponseDTO]:
        """Get ticket by ID"""
        ticket = await self.ticket_repository.get_by_id(ticket_id)
        if not ticket:
            return None
        return await self.ticket_to_dto(ticket)

    async def get_all_tickets(self) -> List[TicketResponseDTO]:
        """Get all tickets"""
        tickets = await self.ticket_repository.get_all()
        return [await self.ticket_to_dto(ticket) for ticket in tickets]

    async def get_visible_tickets(self, actor: Optional[User]) -> List[TicketResponseDTO]:
        """Tickets the actor is allowed to see"""
        tickets = filter_visible_tickets(actor, await self.ticket_repository.get_all())
        return [await self.ticket_to_dto(ticket) for ticket in tickets]

    async def update_ticket(
        self,
        ticket_id: str,
        ticket_data: TicketUpdateDTO,
        actor: Optional[User],
        field_order: Optional[List[str]] = None,
    ) -> OperationResult[TicketResponseDTO]:
        """Merge provided fields into ticket and log which ones were sent.

        ``field_order`` is the order the caller listed the fields in; the log
        details follow it when given.
        """
        if actor is None:
            return OperationResult.unauthorized()

        existing_ticket = await self.ticket_repository.get_by_id(ticket_id)
        if not existing_ticket:
            return OperationResult.not_found(f"Ticket with ID '{ticket_id}' not found")

        changes = {
            field: value
            for field, value in ticket_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }

        problem = await self._check_references(
            changes.get("department_id"), changes.get("assigned_user_id")
        )
        if problem:
            return problem
        if "status" in changes:
            problem = self._check_transition(existing_ticket.status, changes["status"])
            if problem:
                return problem

        sent = list(changes)
        if field_order:
            sent = [field for field in field_order if field in changes]

        for field, value in changes.items():
            setattr(existing_ticket, field, value)

        existing_ticket.updated_at = _next_timestamp(existing_ticket.updated_at)
        existing_ticket.log_trail.append(
            LogEntry(
                id=str(uuid.uuid4()),
                action=LogAction.UPDATED.value,
                user=actor.name,
                timestamp=existing_ticket.updated_at,
                details=", ".join(sent) or None,
            )
        )

        updated_ticket = await self.ticket_repository.update(existing_ticket)
        return OperationResult.success(await self.ticket_to_dto(updated_ticket))

    async def add_log_entry(
        self, ticket_id: str, entry_data: LogEntryCreateDTO
    ) -> OperationResult[TicketResponseDTO]:
        """Append a caller supplied audit entry"""
        if not await self.ticket_repository.get_by_id(ticket_id):
            return OperationResult.not_found(f"Ticket with ID '{ticket_id}' not found")

        entry = LogEntry(
            id=str(uuid.uuid4()),
            action=entry_data.action,
            user=entry_data.user,
            timestamp=datetime.now(timezone.utc),
            details=entry_data.details,
        )
        ticket = await self.ticket_repository.add_log_entry(ticket_id, entry)
        return OperationResult.success(await self.ticket_to_dto(ticket))

    async def resolve_ticket(
        self, ticket_id: str, resolution: str, actor: Optional[User]
    ) -> OperationResult[TicketResponseDTO]:
        """Complete ticket with a resolution note"""
        if actor is None:
            return OperationResult.unauthorized()

        ticket = await self.ticket_repository.get_by_id(ticket_id)
        if not ticket:
            return OperationResult.not_found(f"Ticket with ID '{ticket_id}' not found")

        resolution = (resolution or "").strip()
        if not resolution:
            return OperationResult.invalid("Resolution is required")
        problem = self._check_transition(ticket.status, TicketStatus.COMPLETED)
        if problem:
            return problem

        ticket.status = TicketStatus.COMPLETED
        ticket.resolution = resolution
        ticket.updated_at = _next_timestamp(ticket.updated_at)
        ticket.resolved_at = ticket.updated_at
        ticket.resolved_by = actor.name
        ticket.log_trail.append(
            LogEntry(
                id=str(uuid.uuid4()),
                action=LogAction.RESOLVED.value,
                user=actor.name,
                timestamp=ticket.updated_at,
                details=resolution,
            )
        )

        updated_ticket = await self.ticket_repository.update(ticket)
        logger.info("Ticket resolved: %s by %s", ticket.id, actor.email)
        return OperationResult.success(await self.ticket_to_dto(updated_ticket))

    async def unresolve_ticket(
        self, ticket_id: str, reason: Optional[str], actor: Optional[User]
    ) -> OperationResult[TicketResponseDTO]:
        """Reopen a completed ticket"""
        if actor is None:
            return OperationResult.unauthorized()

        ticket = await self.ticket_repository.get_by_id(ticket_id)
        if not ticket:
            return OperationResult.not_found(f"Ticket with ID '{ticket_id}' not found")
        if ticket.status != TicketStatus.COMPLETED:
            return OperationResult.invalid("Only completed tickets can be reopened")

        ticket.status = TicketStatus.IN_PROGRESS
        ticket.resolution = None
        ticket.resolved_at = None
        ticket.resolved_by = None
        ticket.updated_at = _next_timestamp(ticket.updated_at)
        ticket.log_trail.append(
            LogEntry(
                id=str(uuid.uuid4()),
                action=LogAction.UNRESOLVED.value,
                user=actor.name,
                timestamp=ticket.updated_at,
                details=(reason or "").strip() or None,
            )
        )

        updated_ticket = await self.ticket_repository.update(ticket)
        logger.info("Ticket reopened: %s by %s", ticket.id, actor.email)
        return OperationResult.success(await self.ticket_to_dto(updated_ticket))

    async def delete_ticket(self, ticket_id: str) -> OperationResult[None]:
        """Delete ticket permanently"""
        if not await self.ticket_repository.delete(ticket_id):
            return OperationResult.not_found(f"Ticket with ID '{ticket_id}' not found")
        logger.info("Ticket deleted: %s", ticket_id)
        return OperationResult.success()

    async def list_tickets(
        self, filters: TicketFilterDTO, tickets: Optional[Iterable[Ticket]] = None
    ) -> List[TicketResponseDTO]:
        """Ticket list page filtering: text over subject, name and email"""
        if tickets is None:
            tickets = await self.ticket_repository.get_all()
        matched = [
            ticket for ticket in tickets
            if self._matches(ticket, filters, ("subject", "name", "email"))
        ]
        return [await self.ticket_to_dto(ticket) for ticket in matched]

    async def search_tickets(
        self, filters: TicketFilterDTO, tickets: Optional[Iterable[Ticket]] = None
    ) -> List[TicketResponseDTO]:
        """Search page: also matches message text and filing date.

        Without any criterion nothing is returned.
        """
        if filters.is_empty():
            return []
        if tickets is None:
            tickets = await self.ticket_repository.get_all()
        matched = [
            ticket for ticket in tickets
            if self._matches(ticket, filters, ("subject", "name", "email", "message"))
        ]
        return [await self.ticket_to_dto(ticket) for ticket in matched]

    async def get_stats(self, department_id: Optional[str] = None) -> TicketStatsDTO:
        """Ticket counts by status"""
        if department_id is None:
            tickets = await self.ticket_repository.get_all()
        else:
            tickets = await self.ticket_repository.get_by_department_id(department_id)

        stats = TicketStatsDTO(total=len(tickets))
        for ticket in tickets:
            field = TicketStatus(ticket.status).value.replace("-", "_")
            setattr(stats, field, getattr(stats, field) + 1)
        return stats

    @staticmethod
    def _matches(ticket: Ticket, filters: TicketFilterDTO, text_fields) -> bool:
        query = (filters.search or "").strip().lower()
        if query and not any(query in (getattr(ticket, field) or "").lower() for field in text_fields):
            return False
        if filters.date_filed is not None and ticket.date_filed.date() != filters.date_filed:
            return False
        if filters.department_id is not None and ticket.department_id != filters.department_id:
            return False
        if filters.status is not None and ticket.status != filters.status:
            return False
        if filters.priority is not None and ticket.priority != filters.priority:
            return False
        return True

    def _check_transition(self, current: TicketStatus, new: TicketStatus) -> Optional[OperationResult]:
        if not self.strict_status_transitions:
            return None
        if is_valid_status_transition(current, new):
            return None
        return OperationResult.invalid(
            f"Cannot move ticket from '{TicketStatus(current).value}' to '{TicketStatus(new).value}'"
        )

    async def _check_references(
        self, department_id: Optional[str], assigned_user_id: Optional[str]
    ) -> Optional[OperationResult]:
        if department_id is not None and not await self.department_repository.get_by_id(department_id):
            return OperationResult.invalid(f"Department with ID '{department_id}' not found")
        if assigned_user_id is not None and not await self.user_repository.get_by_id(assigned_user_id):
            return OperationResult.invalid(f"User with ID '{assigned_user_id}' not found")
        return None

    async def ticket_to_dto(self, ticket: Ticket) -> TicketResponseDTO:
        """Convert Ticket entity to TicketResponseDTO with display names resolved"""
        department = await self.department_repository.get_by_id(ticket.department_id)
        assigned = None
        if ticket.assigned_user_id:
            assigned = await self.user_repository.get_by_id(ticket.assigned_user_id)
        creator = await self.user_repository.get_by_id(ticket.created_by)

        return TicketResponseDTO(
            id=ticket.id,
            name=ticket.name,
            phone=ticket.phone,
            email=ticket.email,
            company_section=ticket.company_section,
            source=ticket.source,
            date_filed=ticket.date_filed,
            subject=ticket.subject,
            message=ticket.message,
            recommendation=ticket.recommendation,
            resolution=ticket.resolution,
            resolved_at=ticket.resolved_at,
            resolved_by=ticket.resolved_by,
            priority=ticket.priority,
            status=ticket.status,
            department_id=ticket.department_id,
            department_name=department.name if department else None,
            assigned_user_id=ticket.assigned_user_id,
            assigned_user_name=assigned.name if assigned else None,
            auto_email=ticket.auto_email,
            created_by=ticket.created_by,
            created_by_name=creator.name if creator else None,
            updated_at=ticket.updated_at,
            log_trail=[
                LogEntryResponseDTO(
                    id=entry.id,
                    action=entry.action,
                    user=entry.user,
                    timestamp=entry.timestamp,
                    details=entry.details,
                )
                for entry in ticket.log_trail
            ],
        )
