from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .attendance.checkin import CheckInWorkflow
from .attendance.history import HistoryAggregator
from .attendance.repository import AttendanceRepository
from .core.constants import DEFAULT_IN_QUERY_CHUNK_SIZE, DEFAULT_SESSION_CODE_ATTEMPTS
from .identity.client import IdentityClient
from .identity.provider import DocumentIdentityProvider, IdentityProvider
from .schedules.repository import ScheduleRepository
from .schedules.service import TimetableManager
from .sessions.repository import SessionRepository
from .sessions.service import SessionManager
from .store.document_store import DocumentStore
from .users.repository import UserRepository
from .users.service import AuthService, ProfileManager


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    identity: IdentityClient

    users_repo: UserRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    schedules_repo: ScheduleRepository

    auth_service: AuthService
    profile_manager: ProfileManager
    session_manager: SessionManager
    checkin_workflow: CheckInWorkflow
    history_aggregator: HistoryAggregator
    timetable_manager: TimetableManager


def build_store(settings: ModuleType) -> DocumentStore:
    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()

    if backend == "mysql":
        from .store.connection import DBConfig, DatabaseConnection
        from .store.mysql_document_store import MySQLDocumentStore

        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        return MySQLDocumentStore(conn)

    if backend == "mongo":
        from .store.mongo_document_store import MongoDocumentStore

        return MongoDocumentStore(getattr(settings, "MONGO_URI"), getattr(settings, "MONGO_DB_NAME"))

    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(
    *,
    store: DocumentStore,
    identity_provider: Optional[IdentityProvider] = None,
    enforce_unique_session_codes: bool = True,
    session_code_max_attempts: int = DEFAULT_SESSION_CODE_ATTEMPTS,
    surface_active_session_errors: bool = False,
    in_query_chunk_size: int = DEFAULT_IN_QUERY_CHUNK_SIZE,
) -> Container:
    identity = IdentityClient(identity_provider or DocumentIdentityProvider(store))

    users_repo = UserRepository(store, chunk_size=in_query_chunk_size)
    sessions_repo = SessionRepository(store, chunk_size=in_query_chunk_size)
    attendance_repo = AttendanceRepository(store, chunk_size=in_query_chunk_size)
    schedules_repo = ScheduleRepository(store)

    auth_service = AuthService(identity, users_repo)
    profile_manager = ProfileManager(users_repo, identity)
    session_manager = SessionManager(
        sessions_repo,
        enforce_unique_codes=enforce_unique_session_codes,
        max_code_attempts=session_code_max_attempts,
        surface_list_errors=surface_active_session_errors,
    )
    checkin_workflow = CheckInWorkflow(sessions_repo, attendance_repo, identity)
    history_aggregator = HistoryAggregator(sessions_repo, attendance_repo, users_repo)
    timetable_manager = TimetableManager(schedules_repo)

    return Container(
        store=store,
        identity=identity,
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        auth_service=auth_service,
        profile_manager=profile_manager,
        session_manager=session_manager,
        checkin_workflow=checkin_workflow,
        history_aggregator=history_aggregator,
        timetable_manager=timetable_manager,
    )


def build_container_from_settings(settings: ModuleType, *, store: Optional[DocumentStore] = None) -> Container:
    return build_container(
        store=store or build_store(settings),
        enforce_unique_session_codes=bool(getattr(settings, "ENFORCE_UNIQUE_SESSION_CODES", True)),
        session_code_max_attempts=int(getattr(settings, "SESSION_CODE_MAX_ATTEMPTS", DEFAULT_SESSION_CODE_ATTEMPTS)),
        surface_active_session_errors=bool(getattr(settings, "SURFACE_ACTIVE_SESSION_ERRORS", False)),
        in_query_chunk_size=int(getattr(settings, "IN_QUERY_CHUNK_SIZE", DEFAULT_IN_QUERY_CHUNK_SIZE)),
    )
