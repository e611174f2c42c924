"""User use cases"""
import logging
from typing import List, Optional
from ticketdesk.application.dto.user_dto import (
    UserCreateDTO,
    UserUpdateDTO,
    UserResponseDTO,
)
from ticketdesk.application.results import OperationResult
from ticketdesk.domain.entities.user import User, UserRole
from ticketdesk.domain.repositories.department_repository import DepartmentRepository
from ticketdesk.domain.repositories.ticket_repository import TicketRepository
from ticketdesk.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserUseCases:
    """Use cases for user operations"""

    def __init__(
        self,
        user_repository: UserRepository,
        department_repository: DepartmentRepository,
        ticket_repository: TicketRepository,
    ):
        self.user_repository = user_repository
        self.department_repository = department_repository
        self.ticket_repository = ticket_repository

    async def create_user(self, user_data: UserCreateDTO) -> OperationResult[UserResponseDTO]:
        """Create a new user"""
        if not user_data.name.strip():
            return OperationResult.invalid("User name is required")
        if await self.user_repository.get_by_email(user_data.email):
            return OperationResult.conflict(f"User with email '{user_data.email}' already exists")

        problem = await self._check_placement(None, user_data.role, user_data.department_id)
        if problem:
            return problem

        user = User(
            id="",
            name=user_data.name.strip(),
            email=user_data.email,
            role=user_data.role,
            department_id=user_data.department_id,
        )
        created_user = await self.user_repository.create(user, user_data.password)
        logger.info("User created: %s (%s)", created_user.email, created_user.role.value)
        return OperationResult.success(await self.user_to_dto(created_user))

    async def get_user(self, user_id: str) -> Optional[UserResponseDTO]:
        """Get user by ID"""
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            return None
        return await self.user_to_dto(user)

    async def get_users(
        self,
        role: Optional[UserRole] = None,
        department_id: Optional[str] = None,
    ) -> List[UserResponseDTO]:
        """Get users, optionally narrowed by role and department"""
        users = await self.user_repository.get_all()
        if role is not None:
            users = [user for user in users if user.role == UserRole(role)]
        if department_id is not None:
            users = [user for user in users if user.department_id == department_id]
        return [await self.user_to_dto(user) for user in users]

    async def update_user(self, user_id: str, user_data: UserUpdateDTO) -> OperationResult[UserResponseDTO]:
        """Update user"""
        existing_user = await self.user_repository.get_by_id(user_id)
        if not existing_user:
            return OperationResult.not_found(f"User with ID '{user_id}' not found")

        changes = user_data.model_dump(exclude_unset=True)
        # department_id is the only field that may be cleared
        changes = {
            field: value for field, value in changes.items()
            if value is not None or field == "department_id"
        }

        if "email" in changes and changes["email"] != existing_user.email:
            other = await self.user_repository.get_by_email(changes["email"])
            if other and other.id != user_id:
                return OperationResult.conflict(f"User with email '{changes['email']}' already exists")

        role = changes.get("role", existing_user.role)
        department_id = changes.get("department_id", existing_user.department_id)
        problem = await self._check_placement(user_id, role, department_id)
        if problem:
            return problem

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            if not changes["name"]:
                return OperationResult.invalid("User name is required")

        password = changes.pop("password", None)
        if password is not None:
            await self.user_repository.set_password(user_id, password)

        for field, value in changes.items():
            setattr(existing_user, field, value)
        updated_user = await self.user_repository.update(existing_user)
        return OperationResult.success(await self.user_to_dto(updated_user))

    async def assign_user_to_department(
        self, user_id: str, department_id: Optional[str]
    ) -> OperationResult[UserResponseDTO]:
        """Move user into a department"""
        return await self.update_user(user_id, UserUpdateDTO(department_id=department_id))

    async def delete_user(self, user_id: str) -> OperationResult[None]:
        """Delete user and drop it from ticket assignments.

        ``created_by`` on tickets is kept as a historical id.
        """
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            return OperationResult.not_found(f"User with ID '{user_id}' not found")

        for ticket in await self.ticket_repository.get_by_assigned_user_id(user_id):
            ticket.assigned_user_id = None
            await self.ticket_repository.update(ticket)

        await self.user_repository.delete(user_id)
        logger.info("User deleted: %s", user.email)
        return OperationResult.success()

    async def _check_placement(
        self,
        user_id: Optional[str],
        role: UserRole,
        department_id: Optional[str],
    ) -> Optional[OperationResult]:
        """Validate department reference and the one-leader-per-department rule"""
        if department_id is not None:
            if not await self.department_repository.get_by_id(department_id):
                return OperationResult.invalid(f"Department with ID '{department_id}' not found")

        if UserRole(role) != UserRole.SUB_ADMIN:
            return None
        if department_id is None:
            return OperationResult.invalid("A sub-admin must lead a department")

        for member in await self.user_repository.get_by_department_id(department_id):
            if member.role == UserRole.SUB_ADMIN and member.id != user_id:
                return OperationResult.conflict(
                    f"Department already has a sub-admin: {member.name}"
                )
        return None

    async def user_to_dto(self, user: User) -> UserResponseDTO:
        """Convert User entity to UserResponseDTO"""
        department_name = None
        if user.department_id:
            department = await self.department_repository.get_by_id(user.department_id)
            department_name = department.name if department else None

        return UserResponseDTO(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            department_id=user.department_id,
            department_name=department_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
