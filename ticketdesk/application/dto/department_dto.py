"""Department DTOs"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class DepartmentCreateDTO(BaseModel):
    """DTO for creating a department"""
    name: str
    description: Optional[str] = None


class DepartmentUpdateDTO(BaseModel):
    """DTO for updating a department"""
    name: Optional[str] = None
    description: Optional[str] = None


class DepartmentResponseDTO(BaseModel):
    """DTO for department response"""
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    user_count: int = 0
    ticket_count: int = 0
    leader_id: Optional[str] = None
    leader_name: Optional[str] = None

    model_config = {"from_attributes": True}
