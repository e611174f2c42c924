"""Domain store: single owner of tickets, users, departments and the session.

Every state change is followed by a full snapshot written to the configured
key-value storage. A store is a plain object; build one per process (or per
test) and hand it to whatever renders it.
"""
import logging
from typing import List, Optional, Union
from ticketdesk.application.dto.auth_dto import LoginDTO
from ticketdesk.application.dto.department_dto import (
    DepartmentCreateDTO,
    DepartmentResponseDTO,
    DepartmentUpdateDTO,
)
from ticketdesk.application.dto.ticket_dto import (
    LogEntryCreateDTO,
    TicketCreateDTO,
    TicketFilterDTO,
    TicketResponseDTO,
    TicketStatsDTO,
    TicketUpdateDTO,
)
from ticketdesk.application.dto.user_dto import (
    UserCreateDTO,
    UserResponseDTO,
    UserUpdateDTO,
)
from ticketdesk.application.permissions import filter_visible_tickets
from ticketdesk.application.results import OperationResult
from ticketdesk.application.use_cases.auth_use_cases import AuthUseCases
from ticketdesk.application.use_cases.department_use_cases import DepartmentUseCases
from ticketdesk.application.use_cases.ticket_use_cases import TicketUseCases
from ticketdesk.application.use_cases.user_use_cases import UserUseCases
from ticketdesk.domain.entities.user import User, UserRole
from ticketdesk.infrastructure.config.settings import Settings, settings as default_settings
from ticketdesk.infrastructure.init_data import init_default_data
from ticketdesk.infrastructure.persistence.snapshot import (
    StoreSnapshot,
    StoreState,
    department_to_record,
    parse_snapshot,
    record_to_department,
    record_to_ticket,
    record_to_user,
    ticket_to_record,
    user_to_record,
)
from ticketdesk.infrastructure.persistence.storage import KeyValueStorage
from ticketdesk.infrastructure.repositories.department_repository_impl import DepartmentRepositoryImpl
from ticketdesk.infrastructure.repositories.ticket_repository_impl import TicketRepositoryImpl
from ticketdesk.infrastructure.repositories.user_repository_impl import UserRepositoryImpl

logger = logging.getLogger(__name__)


class TicketStore:
    """Ticket desk state and the operations that change it"""

    def __init__(self, storage: KeyValueStorage, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.storage = storage

        self.user_repository = UserRepositoryImpl(bcrypt_rounds=self.settings.BCRYPT_ROUNDS)
        self.department_repository = DepartmentRepositoryImpl()
        self.ticket_repository = TicketRepositoryImpl()

        self.auth_use_cases = AuthUseCases(self.user_repository)
        self.user_use_cases = UserUseCases(
            self.user_repository, self.department_repository, self.ticket_repository
        )
        self.department_use_cases = DepartmentUseCases(
            self.department_repository, self.user_repository, self.ticket_repository
        )
        self.ticket_use_cases = TicketUseCases(
            self.ticket_repository,
            self.user_repository,
            self.department_repository,
            strict_status_transitions=self.settings.STRICT_STATUS_TRANSITIONS,
        )

        self._session: Optional[User] = None

    # Session

    @property
    def user(self) -> Optional[User]:
        """Session user entity, or None"""
        return self._session

    @property
    def company_sections(self) -> List[str]:
        return list(self.settings.COMPANY_SECTIONS)

    @property
    def sources(self) -> List[str]:
        return list(self.settings.TICKET_SOURCES)

    async def current_user(self) -> Optional[UserResponseDTO]:
        if self._session is None:
            return None
        return await self.user_use_cases.user_to_dto(self._session)

    async def login(self, email: str, password: str) -> bool:
        """Start a session; the previous one is kept on failure"""
        user = await self.auth_use_cases.authenticate(LoginDTO(email=email, password=password))
        if user is None:
            return False
        self._session = user
        await self._persist()
        return True

    async def logout(self) -> None:
        if self._session is not None:
            logger.info("User %s logged out", self._session.email)
        self._session = None
        await self._persist()

    async def set_user(self, user_id: str) -> OperationResult[UserResponseDTO]:
        """Make an existing user the session user without a password check"""
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            return OperationResult.not_found(f"User with ID '{user_id}' not found")
        self._session = user
        await self._persist()
        return OperationResult.success(await self.user_use_cases.user_to_dto(user))

    # Tickets

    async def create_ticket(
        self, ticket_data: Union[TicketCreateDTO, dict]
    ) -> OperationResult[TicketResponseDTO]:
        result = await self.ticket_use_cases.create_ticket(
            TicketCreateDTO.model_validate(ticket_data), self._session
        )
        return await self._persisted(result)

    async def update_ticket(
        self, ticket_id: str, updates: Union[TicketUpdateDTO, dict]
    ) -> OperationResult[TicketResponseDTO]:
        field_order = list(updates) if isinstance(updates, dict) else None
        result = await self.ticket_use_cases.update_ticket(
            ticket_id, TicketUpdateDTO.model_validate(updates), self._session, field_order
        )
        return await self._persisted(result)

    async def add_log_entry(
        self, ticket_id: str, entry: Union[LogEntryCreateDTO, dict]
    ) -> OperationResult[TicketResponseDTO]:
        result = await self.ticket_use_cases.add_log_entry(
            ticket_id, LogEntryCreateDTO.model_validate(entry)
        )
        return await self._persisted(result)

    async def resolve_ticket(self, ticket_id: str, resolution: str) -> OperationResult[TicketResponseDTO]:
        result = await self.ticket_use_cases.resolve_ticket(ticket_id, resolution, self._session)
        return await self._persisted(result)

    async def unresolve_ticket(
        self, ticket_id: str, reason: Optional[str] = None
    ) -> OperationResult[TicketResponseDTO]:
        result = await self.ticket_use_cases.unresolve_ticket(ticket_id, reason, self._session)
        return await self._persisted(result)

    async def delete_ticket(self, ticket_id: str) -> OperationResult[None]:
        result = await self.ticket_use_cases.delete_ticket(ticket_id)
        return await self._persisted(result)

    async def get_ticket(self, ticket_id: str) -> Optional[TicketResponseDTO]:
        return await self.ticket_use_cases.get_ticket(ticket_id)

    async def get_tickets(self) -> List[TicketResponseDTO]:
        return await self.ticket_use_cases.get_all_tickets()

    async def visible_tickets(self) -> List[TicketResponseDTO]:
        """Tickets the session user may see"""
        return await self.ticket_use_cases.get_visible_tickets(self._session)

    async def list_tickets(
        self, filters: Union[TicketFilterDTO, dict, None] = None, visible_only: bool = False
    ) -> List[TicketResponseDTO]:
        tickets = await self._ticket_scope(visible_only)
        return await self.ticket_use_cases.list_tickets(
            TicketFilterDTO.model_validate(filters or {}), tickets
        )

    async def search_tickets(
        self, filters: Union[TicketFilterDTO, dict, None] = None, visible_only: bool = False
    ) -> List[TicketResponseDTO]:
        tickets = await self._ticket_scope(visible_only)
        return await self.ticket_use_cases.search_tickets(
            TicketFilterDTO.model_validate(filters or {}), tickets
        )

    async def dashboard_stats(self, department_id: Optional[str] = None) -> TicketStatsDTO:
        return await self.ticket_use_cases.get_stats(department_id)

    async def _ticket_scope(self, visible_only: bool):
        if not visible_only:
            return None
        return filter_visible_tickets(self._session, await self.ticket_repository.get_all())

    # Departments

    async def create_department(
        self, name: str, description: Optional[str] = None
    ) -> OperationResult[DepartmentResponseDTO]:
        result = await self.department_use_cases.create_department(
            DepartmentCreateDTO(name=name, description=description)
        )
        return await self._persisted(result)

    async def update_department(
        self, department_id: str, updates: Union[DepartmentUpdateDTO, dict]
    ) -> OperationResult[DepartmentResponseDTO]:
        result = await self.department_use_cases.update_department(
            department_id, DepartmentUpdateDTO.model_validate(updates)
        )
        return await self._persisted(result)

    async def delete_department(self, department_id: str) -> OperationResult[None]:
        result = await self.department_use_cases.delete_department(department_id)
        return await self._persisted(result)

    async def get_department(self, department_id: str) -> Optional[DepartmentResponseDTO]:
        return await self.department_use_cases.get_department(department_id)

    async def get_departments(self) -> List[DepartmentResponseDTO]:
        return await self.department_use_cases.get_all_departments()

    async def get_department_users(
        self, department_id: str, role: Optional[UserRole] = None
    ) -> List[UserResponseDTO]:
        return await self.user_use_cases.get_users(role=role, department_id=department_id)

    # Users

    async def create_user(self, user_data: Union[UserCreateDTO, dict]) -> OperationResult[UserResponseDTO]:
        result = await self.user_use_cases.create_user(UserCreateDTO.model_validate(user_data))
        return await self._persisted(result)

    async def update_user(
        self, user_id: str, updates: Union[UserUpdateDTO, dict]
    ) -> OperationResult[UserResponseDTO]:
        result = await self.user_use_cases.update_user(user_id, UserUpdateDTO.model_validate(updates))
        return await self._persisted(result)

    async def delete_user(self, user_id: str) -> OperationResult[None]:
        result = await self.user_use_cases.delete_user(user_id)
        if result.ok and self._session is not None and self._session.id == user_id:
            self._session = None
        return await self._persisted(result)

    async def assign_user_to_department(
        self, user_id: str, department_id: Optional[str]
    ) -> OperationResult[UserResponseDTO]:
        result = await self.user_use_cases.assign_user_to_department(user_id, department_id)
        return await self._persisted(result)

    async def get_user(self, user_id: str) -> Optional[UserResponseDTO]:
        return await self.user_use_cases.get_user(user_id)

    async def get_users(
        self, role: Optional[UserRole] = None, department_id: Optional[str] = None
    ) -> List[UserResponseDTO]:
        return await self.user_use_cases.get_users(role=role, department_id=department_id)

    # Persistence

    async def load(self) -> None:
        """Rehydrate from storage, or seed when nothing usable is stored"""
        snapshot = parse_snapshot(
            self.storage.get_item(self.settings.STORE_NAME),
            self.settings.STORE_VERSION,
        )
        if snapshot is None:
            await self._seed()
            logger.info("Store initialized with seed data")
        else:
            await self._restore(snapshot.state)
            logger.info(
                "Store rehydrated: %d tickets, %d departments, %d users",
                len(snapshot.state.tickets),
                len(snapshot.state.departments),
                len(snapshot.state.users),
            )
        await self._persist()

    async def reset_store(self) -> None:
        """Discard persisted state and the session, then restore seed data"""
        self.storage.remove_item(self.settings.STORE_NAME)
        self._session = None
        await self._seed()
        await self._persist()
        logger.info("Store reset to seed data")

    async def snapshot(self) -> StoreSnapshot:
        users = await self.user_repository.get_all()
        return StoreSnapshot(
            version=self.settings.STORE_VERSION,
            state=StoreState(
                user=self._session.id if self._session else None,
                tickets=[ticket_to_record(t) for t in await self.ticket_repository.get_all()],
                departments=[
                    department_to_record(d) for d in await self.department_repository.get_all()
                ],
                users=[
                    user_to_record(u, self.user_repository.get_password_hash(u.id) or "")
                    for u in users
                ],
            ),
        )

    async def _seed(self) -> None:
        self.user_repository.clear()
        self.department_repository.clear()
        self.ticket_repository.clear()
        await init_default_data(
            self.user_repository,
            self.department_repository,
            self.ticket_repository,
            self.settings.DEFAULT_PASSWORD,
        )

    async def _restore(self, state: StoreState) -> None:
        self.user_repository.clear()
        self.department_repository.clear()
        self.ticket_repository.clear()
        for record in state.departments:
            self.department_repository.restore(record_to_department(record))
        for record in state.users:
            self.user_repository.restore(record_to_user(record), record.password_hash)
        for record in state.tickets:
            self.ticket_repository.restore(record_to_ticket(record))

        self._session = None
        if state.user is not None:
            self._session = await self.user_repository.get_by_id(state.user)

    async def _persist(self) -> None:
        snapshot = await self.snapshot()
        self.storage.set_item(self.settings.STORE_NAME, snapshot.model_dump_json())
        logger.debug("Store snapshot written to '%s'", self.settings.STORE_NAME)

    async def _persisted(self, result: OperationResult) -> OperationResult:
        if result.ok:
            await self._persist()
        return result
