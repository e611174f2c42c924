"""Ticket repository implementation"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional
from ticketdesk.domain.entities.ticket import Ticket, LogEntry
from ticketdesk.domain.repositories.ticket_repository import TicketRepository


class TicketRepositoryImpl(TicketRepository):
    """Ticket repository implementation with in-memory storage.

    Insertion order is kept, so listings come back oldest first.
    """

    def __init__(self):
        self._tickets: Dict[str, Ticket] = {}

    async def create(self, ticket: Ticket) -> Ticket:
        """Create a new ticket"""
        ticket.id = ticket.id or str(uuid.uuid4())
        if ticket.log_trail is None:
            ticket.log_trail = []

        self._tickets[ticket.id] = ticket
        return ticket

    async def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """Get ticket by ID"""
        return self._tickets.get(ticket_id)

    async def get_all(self) -> List[Ticket]:
        """Get all tickets"""
        return list(self._tickets.values())

    async def get_by_department_id(self, department_id: str) -> List[Ticket]:
        """Get tickets of a department"""
        return [
            ticket for ticket in self._tickets.values()
            if ticket.department_id == department_id
        ]

    async def get_by_assigned_user_id(self, user_id: str) -> List[Ticket]:
        """Get tickets assigned to a user"""
        return [
            ticket for ticket in self._tickets.values()
            if ticket.assigned_user_id == user_id
        ]

    async def update(self, ticket: Ticket) -> Ticket:
        """Update ticket"""
        if ticket.id not in self._tickets:
            raise ValueError(f"Ticket with ID '{ticket.id}' not found")

        self._tickets[ticket.id] = ticket
        return ticket

    async def delete(self, ticket_id: str) -> bool:
        """Delete ticket"""
        if ticket_id not in self._tickets:
            return False

        del self._tickets[ticket_id]
        return True

    async def add_log_entry(self, ticket_id: str, entry: LogEntry) -> Ticket:
        """Append a log entry to ticket"""
        ticket = await self.get_by_id(ticket_id)
        if not ticket:
            raise ValueError(f"Ticket with ID '{ticket_id}' not found")

        entry.id = entry.id or str(uuid.uuid4())
        if entry.timestamp is None:
            entry.timestamp = datetime.now(timezone.utc)

        ticket.log_trail.append(entry)
        return ticket

    def restore(self, ticket: Ticket) -> None:
        self._tickets[ticket.id] = ticket

    def clear(self) -> None:
        self._tickets.clear()
