from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .admin_profile.notifier import LoggingTokenNotifier
from .admin_profile.service import AdminCredentialService
from .admin_profile.store import InMemoryPendingUpdateStore
from .common.datetime_utils import now_local
from .core.constants import ADMIN_TOKEN_TTL_MINUTES, MAX_PHOTO_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .payroll.rates import HourlyRate
from .payroll.service import WageReportService
from .users.json_user_repository import JsonUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.seed import default_users, ensure_seed_users
from .users.service import AuthService, EmployeeService
from .work_entries.json_store import JsonWorkEntryStore
from .work_entries.mysql_store import MySQLWorkEntryStore
from .work_entries.repository import WorkEntryStore
from .work_entries.service import WorkSessionService

STORAGE_JSON = "json"
STORAGE_MYSQL = "mysql"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    work_entry_store: WorkEntryStore
    users_repo: UserRepository

    auth_service: AuthService
    employee_service: EmployeeService
    work_session_service: WorkSessionService
    wage_report_service: WageReportService
    admin_credential_service: AdminCredentialService

    max_photo_bytes: int


def build_container(
    settings: Mapping[str, Any],
    *,
    clock: Callable[[], datetime] = now_local,
    seed_users: bool = True,
) -> Container:
    backend = str(settings.get("STORAGE_BACKEND", STORAGE_JSON)).lower()

    conn: Optional[DatabaseConnection] = None
    if backend == STORAGE_MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings["DB_CONFIG"]))
        work_entry_store: WorkEntryStore = MySQLWorkEntryStore(conn)
        users_repo: UserRepository = MySQLUserRepository(conn)
    elif backend == STORAGE_JSON:
        data_dir = Path(settings.get("DATA_DIR", "data"))
        work_entry_store = JsonWorkEntryStore(data_dir / settings.get("WORK_ENTRIES_FILE", "work-entries.data.json"))
        users_repo = JsonUserRepository(data_dir / settings.get("USERS_FILE", "users.data.json"))
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")

    if seed_users:
        ensure_seed_users(
            users_repo,
            default_users(
                admin_email=str(settings.get("SEED_ADMIN_EMAIL", "admin")),
                admin_password=str(settings.get("SEED_ADMIN_PASSWORD", "admin")),
            ),
        )

    euros, cents = settings.get("DEFAULT_HOURLY_RATE", (10, 0))

    auth_service = AuthService(users_repo)
    employee_service = EmployeeService(users_repo)
    work_session_service = WorkSessionService(
        work_entry_store,
        clock=clock,
        single_open_entry=bool(settings.get("SINGLE_OPEN_ENTRY", False)),
    )
    wage_report_service = WageReportService(
        work_session_service,
        employee_service,
        default_rate=HourlyRate.from_input(euros, cents),
    )
    admin_credential_service = AdminCredentialService(
        users_repo,
        InMemoryPendingUpdateStore(),
        clock=clock,
        ttl_minutes=int(settings.get("ADMIN_TOKEN_TTL_MINUTES", ADMIN_TOKEN_TTL_MINUTES)),
        notifier=LoggingTokenNotifier(),
    )

    return Container(
        conn=conn,
        work_entry_store=work_entry_store,
        users_repo=users_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        work_session_service=work_session_service,
        wage_report_service=wage_report_service,
        admin_credential_service=admin_credential_service,
        max_photo_bytes=int(settings.get("MAX_PHOTO_BYTES", MAX_PHOTO_BYTES)),
    )
