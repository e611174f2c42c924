"""Role-based ticket desk domain store"""
from ticketdesk.application.results import OperationResult, ResultStatus
from ticketdesk.application.store import TicketStore
from ticketdesk.main import create_store

__all__ = ["OperationResult", "ResultStatus", "TicketStore", "create_store"]
