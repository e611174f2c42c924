"""Ticket repository interface"""
from abc import ABC, abstractmethod
from typing import List, Optional
from ticketdesk.domain.entities.ticket import Ticket, LogEntry


class TicketRepository(ABC):
    """Interface for ticket repository"""

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        """Create a new ticket"""
        pass

    @abstractmethod
    async def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """Get ticket by ID"""
        pass

    @abstractmethod
    async def get_all(self) -> List[Ticket]:
        """Get all tickets"""
        pass

    @abstractmethod
    async def get_by_department_id(self, department_id: str) -> List[Ticket]:
        """Get tickets of a department"""
        pass

    @abstractmethod
    async def get_by_assigned_user_id(self, user_id: str) -> List[Ticket]:
        """Get tickets assigned to a user"""
        pass

    @abstractmethod
    async def update(self, ticket: Ticket) -> Ticket:
        """Update ticket"""
        pass

    @abstractmethod
    async def delete(self, ticket_id: str) -> bool:
        """Delete ticket"""
        pass

    @abstractmethod
    async def add_log_entry(self, ticket_id: str, entry: LogEntry) -> Ticket:
        """Append a log entry to ticket"""
        pass
