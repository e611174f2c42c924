"""User repository interface"""
from abc import ABC, abstractmethod
from typing import List, Optional
from ticketdesk.domain.entities.user import User


class UserRepository(ABC):
    """Interface for user repository"""

    @abstractmethod
    async def create(self, user: User, password: str) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        pass

    @abstractmethod
    async def get_all(self) -> List[User]:
        """Get all users"""
        pass

    @abstractmethod
    async def get_by_department_id(self, department_id: str) -> List[User]:
        """Get users of a department"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update user"""
        pass

    @abstractmethod
    async def set_password(self, user_id: str, password: str) -> None:
        """Replace user password"""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete user"""
        pass

    @abstractmethod
    async def verify_password(self, email: str, password: str) -> Optional[User]:
        """Return the user owning email if password matches"""
        pass
