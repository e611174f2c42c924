"""Role-derived authorization rules.

Admins manage everything. A sub-admin leads exactly one department and may
manage that department's members and tickets. Members work the tickets of
their own department. The store itself only requires a session for ticket
mutations; the presentation layer asks these predicates before offering an
action.
"""
from typing import Iterable, List, Optional, Union
from ticketdesk.domain.entities.ticket import STATUS_TRANSITIONS, Ticket, TicketStatus
from ticketdesk.domain.entities.user import User, UserRole


def _role(user) -> Optional[UserRole]:
    if user is None:
        return None
    return UserRole(user.role)


def is_admin(user) -> bool:
    return _role(user) == UserRole.ADMIN


def is_sub_admin(user) -> bool:
    return _role(user) == UserRole.SUB_ADMIN


def can_manage_departments(user) -> bool:
    """Create, rename and delete departments"""
    return is_admin(user)


def can_manage_sub_admins(user) -> bool:
    return is_admin(user)


def can_view_department(user, department_id: str) -> bool:
    if is_admin(user):
        return True
    return is_sub_admin(user) and user.department_id == department_id


def can_manage_department_users(user, department_id: str) -> bool:
    """Add or edit members of a department"""
    return can_view_department(user, department_id)


def can_create_ticket_in(user, department_id: str) -> bool:
    if user is None:
        return False
    if is_admin(user):
        return True
    return user.department_id is not None and user.department_id == department_id


def can_view_ticket(user, ticket) -> bool:
    if user is None:
        return False
    if is_admin(user):
        return True
    return user.department_id is not None and ticket.department_id == user.department_id


def filter_visible_tickets(user: Optional[User], tickets: Iterable[Ticket]) -> List[Ticket]:
    return [ticket for ticket in tickets if can_view_ticket(user, ticket)]


def is_valid_status_transition(
    current: Union[TicketStatus, str],
    new: Union[TicketStatus, str],
) -> bool:
    """Check a status change against the strict workflow"""
    current, new = TicketStatus(current), TicketStatus(new)
    if current == new:
        return True
    return new in STATUS_TRANSITIONS[current]
