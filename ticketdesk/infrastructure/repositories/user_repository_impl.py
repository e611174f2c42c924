"""User repository implementation"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional
from ticketdesk.domain.entities.user import User
from ticketdesk.domain.repositories.user_repository import UserRepository
from ticketdesk.infrastructure.security.passwords import hash_password, verify_password


class UserRepositoryImpl(UserRepository):
    """User repository implementation with in-memory storage"""

    def __init__(self, bcrypt_rounds: int = 12):
        self._users: Dict[str, User] = {}
        self._passwords: Dict[str, str] = {}
        self._bcrypt_rounds = bcrypt_rounds

    async def create(self, user: User, password: str) -> User:
        """Create a new user"""
        hashed = hash_password(password, self._bcrypt_rounds)

        user.id = user.id or str(uuid.uuid4())
        user.created_at = datetime.now(timezone.utc)
        user.updated_at = user.created_at

        self._users[user.id] = user
        self._passwords[user.id] = hashed
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (exact match)"""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def get_all(self) -> List[User]:
        """Get all users"""
        return list(self._users.values())

    async def get_by_department_id(self, department_id: str) -> List[User]:
        """Get users of a department"""
        return [
            user for user in self._users.values()
            if user.department_id == department_id
        ]

    async def update(self, user: User) -> User:
        """Update user"""
        if user.id not in self._users:
            raise ValueError(f"User with ID '{user.id}' not found")

        user.updated_at = datetime.now(timezone.utc)
        self._users[user.id] = user
        return user

    async def set_password(self, user_id: str, password: str) -> None:
        """Replace user password"""
        if user_id not in self._users:
            raise ValueError(f"User with ID '{user_id}' not found")
        self._passwords[user_id] = hash_password(password, self._bcrypt_rounds)

    async def delete(self, user_id: str) -> bool:
        """Delete user"""
        if user_id not in self._users:
            return False

        del self._users[user_id]
        self._passwords.pop(user_id, None)
        return True

    async def verify_password(self, email: str, password: str) -> Optional[User]:
        """Return the user owning email if password matches"""
        user = await self.get_by_email(email)
        if user is None:
            return None
        if not verify_password(password, self._passwords.get(user.id, "")):
            return None
        return user

    def get_password_hash(self, user_id: str) -> Optional[str]:
        """Stored hash for snapshotting"""
        return self._passwords.get(user_id)

    def restore(self, user: User, password_hash: str) -> None:
        """Put back a user with an already hashed password"""
        self._users[user.id] = user
        self._passwords[user.id] = password_hash

    def clear(self) -> None:
        self._users.clear()
        self._passwords.clear()
