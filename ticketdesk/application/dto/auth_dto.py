"""Authentication DTOs"""
from pydantic import BaseModel


class LoginDTO(BaseModel):
    """DTO for user login"""
    email: str
    password: str
