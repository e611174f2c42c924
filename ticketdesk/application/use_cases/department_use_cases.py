"""Department use cases"""
import logging
from typing import List, Optional
from ticketdesk.application.dto.department_dto import (
    DepartmentCreateDTO,
    DepartmentUpdateDTO,
    DepartmentResponseDTO,
)
from ticketdesk.application.results import OperationResult
from ticketdesk.domain.entities.department import Department
from ticketdesk.domain.entities.user import UserRole
from ticketdesk.domain.repositories.department_repository import DepartmentRepository
from ticketdesk.domain.repositories.ticket_repository import TicketRepository
from ticketdesk.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class DepartmentUseCases:
    """Use cases for department operations"""

    def __init__(
        self,
        department_repository: DepartmentRepository,
        user_repository: UserRepository,
        ticket_repository: TicketRepository,
    ):
        self.department_repository = department_repository
        self.user_repository = user_repository
        self.ticket_repository = ticket_repository

    async def create_department(
        self, department_data: DepartmentCreateDTO
    ) -> OperationResult[DepartmentResponseDTO]:
        """Create a new department"""
        name = department_data.name.strip()
        if not name:
            return OperationResult.invalid("Department name is required")
        if await self.department_repository.get_by_name(name):
            return OperationResult.conflict(f"Department '{name}' already exists")

        department = Department(
            id="",
            name=name,
            description=department_data.description,
        )
        created = await self.department_repository.create(department)
        logger.info("Department created: %s", created.name)
        return OperationResult.success(await self.department_to_dto(created))

    async def get_department(self, department_id: str) -> Optional[DepartmentResponseDTO]:
        """Get department by ID"""
        department = await self.department_repository.get_by_id(department_id)
        if not department:
            return None
        return await self.department_to_dto(department)

    async def get_all_departments(self) -> List[DepartmentResponseDTO]:
        """Get all departments"""
        departments = await self.department_repository.get_all()
        return [await self.department_to_dto(department) for department in departments]

    async def update_department(
        self, department_id: str, department_data: DepartmentUpdateDTO
    ) -> OperationResult[DepartmentResponseDTO]:
        """Update department"""
        existing = await self.department_repository.get_by_id(department_id)
        if not existing:
            return OperationResult.not_found(f"Department with ID '{department_id}' not found")

        changes = department_data.model_dump(exclude_unset=True)
        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                return OperationResult.invalid("Department name is required")
            other = await self.department_repository.get_by_name(name)
            if other and other.id != department_id:
                return OperationResult.conflict(f"Department '{name}' already exists")
            existing.name = name
        if "description" in changes:
            existing.description = changes["description"]

        updated = await self.department_repository.update(existing)
        return OperationResult.success(await self.department_to_dto(updated))

    async def delete_department(self, department_id: str) -> OperationResult[None]:
        """Delete department.

        Refused while users or tickets still reference it.
        """
        department = await self.department_repository.get_by_id(department_id)
        if not department:
            return OperationResult.not_found(f"Department with ID '{department_id}' not found")

        users = await self.user_repository.get_by_department_id(department_id)
        tickets = await self.ticket_repository.get_by_department_id(department_id)
        if users or tickets:
            return OperationResult.conflict(
                f"Department '{department.name}' still has {len(users)} user(s) "
                f"and {len(tickets)} ticket(s)"
            )

        await self.department_repository.delete(department_id)
        logger.info("Department deleted: %s", department.name)
        return OperationResult.success()

    async def department_to_dto(self, department: Department) -> DepartmentResponseDTO:
        """Convert Department entity to DepartmentResponseDTO"""
        users = await self.user_repository.get_by_department_id(department.id)
        tickets = await self.ticket_repository.get_by_department_id(department.id)
        leader = next((user for user in users if user.role == UserRole.SUB_ADMIN), None)

        return DepartmentResponseDTO(
            id=department.id,
            name=department.name,
            description=department.description,
            created_at=department.created_at,
            user_count=len(users),
            ticket_count=len(tickets),
            leader_id=leader.id if leader else None,
            leader_name=leader.name if leader else None,
        )
