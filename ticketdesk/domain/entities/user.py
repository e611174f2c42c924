"""User domain entity"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """User roles enum"""
    ADMIN = "admin"
    SUB_ADMIN = "sub-admin"
    USER = "user"


@dataclass
class User:
    """User domain entity"""
    id: str
    name: str
    email: str
    role: UserRole
    department_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
        if self.updated_at is None:
            self.updated_at = self.created_at
