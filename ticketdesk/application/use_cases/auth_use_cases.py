"""Authentication use cases"""
import logging
from typing import Optional
from ticketdesk.application.dto.auth_dto import LoginDTO
from ticketdesk.domain.entities.user import User
from ticketdesk.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthUseCases:
    """Use cases for authentication"""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def authenticate(self, login_data: LoginDTO) -> Optional[User]:
        """Return the user matching email and password, if any.

        Email comparison is exact, so ``Admin@company.com`` does not match
        ``admin@company.com``.
        """
        user = await self.user_repository.verify_password(login_data.email, login_data.password)
        if user is None:
            logger.warning("Failed login attempt for %s", login_data.email)
            return None
        logger.info("User %s logged in", user.email)
        return user
