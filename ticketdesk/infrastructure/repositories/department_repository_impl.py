"""Department repository implementation"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional
from ticketdesk.domain.entities.department import Department
from ticketdesk.domain.repositories.department_repository import DepartmentRepository


class DepartmentRepositoryImpl(DepartmentRepository):
    """Department repository implementation with in-memory storage"""

    def __init__(self):
        self._departments: Dict[str, Department] = {}

    async def create(self, department: Department) -> Department:
        """Create a new department"""
        department.id = department.id or str(uuid.uuid4())
        department.created_at = datetime.now(timezone.utc)

        self._departments[department.id] = department
        return department

    async def get_by_id(self, department_id: str) -> Optional[Department]:
        """Get department by ID"""
        return self._departments.get(department_id)

    async def get_by_name(self, name: str) -> Optional[Department]:
        """Get department by name (case-insensitive)"""
        wanted = name.strip().lower()
        for department in self._departments.values():
            if department.name.strip().lower() == wanted:
                return department
        return None

    async def get_all(self) -> List[Department]:
        """Get all departments"""
        return list(self._departments.values())

    async def update(self, department: Department) -> Department:
        """Update department"""
        if department.id not in self._departments:
            raise ValueError(f"Department with ID '{department.id}' not found")

        self._departments[department.id] = department
        return department

    async def delete(self, department_id: str) -> bool:
        """Delete department"""
        if department_id not in self._departments:
            return False

        del self._departments[department_id]
        return True

    def restore(self, department: Department) -> None:
        self._departments[department.id] = department

    def clear(self) -> None:
        self._departments.clear()
