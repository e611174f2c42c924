"""Application settings"""
import logging
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Ticket Desk"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Persistence
    STORAGE_BACKEND: str = "file"  # file, memory
    STORAGE_DIR: str = ".ticketdesk"
    STORE_NAME: str = "ticketing-system-storage"
    STORE_VERSION: int = 1  # bump to discard previously persisted snapshots

    # Security
    BCRYPT_ROUNDS: int = 12
    DEFAULT_PASSWORD: str = "password"  # seeded demo accounts

    # Workflow
    STRICT_STATUS_TRANSITIONS: bool = False

    # Reference lists
    COMPANY_SECTIONS: List[str] = ["Sales", "Marketing", "Support", "Development", "HR"]
    TICKET_SOURCES: List[str] = ["Tawk.to", "Walk-in", "Phone", "Email", "Website Form"]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def get_log_level(self) -> int:
        """Resolve the effective logging level"""
        if self.DEBUG:
            return logging.DEBUG
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unsupported log level: {self.LOG_LEVEL}")
        return level


settings = Settings()
