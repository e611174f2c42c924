"""Department domain entity"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Department:
    """Department domain entity.

    Membership is not stored here: users and tickets point at a department
    through their ``department_id``.
    """
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
