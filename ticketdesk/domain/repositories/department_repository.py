"""Department repository interface"""
from abc import ABC, abstractmethod
from typing import List, Optional
from ticketdesk.domain.entities.department import Department


class DepartmentRepository(ABC):
    """Interface for department repository"""

    @abstractmethod
    async def create(self, department: Department) -> Department:
        """Create a new department"""
        pass

    @abstractmethod
    async def get_by_id(self, department_id: str) -> Optional[Department]:
        """Get department by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Department]:
        """Get department by name"""
        pass

    @abstractmethod
    async def get_all(self) -> List[Department]:
        """Get all departments"""
        pass

    @abstractmethod
    async def update(self, department: Department) -> Department:
        """Update department"""
        pass

    @abstractmethod
    async def delete(self, department_id: str) -> bool:
        """Delete department"""
        pass
