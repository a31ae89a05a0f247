from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .audit.mysql_audit_sink import MySQLAuditSink
from .audit.recorder import AuditRecorder
from .clock.service import ClockService
from .compliance.rules import ComplianceRules
from .core.constants import DEFAULT_DAILY_TARGET_MINUTES, DEFAULT_TIMEZONE
from .corrections.service import ManualCorrectionService
from .database.connection import DBConfig, DatabaseConnection
from .employee_config.mysql_employee_config_repository import MySQLEmployeeConfigRepository
from .employee_config.service import EmployeeConfigService
from .status.service import StatusResolver
from .summaries.mysql_daily_summary_repository import MySQLDailySummaryRepository
from .summaries.service import DailySummaryService
from .team.service import TeamStatusService
from .time_entries.locks import MySQLUserLocks
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.service import TimeEntryService
from .users.mysql_directory_repository import MySQLDirectoryRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    entries_repo: MySQLTimeEntryRepository
    summaries_repo: MySQLDailySummaryRepository
    directory_repo: MySQLDirectoryRepository
    employee_config_repo: MySQLEmployeeConfigRepository

    employee_config_service: EmployeeConfigService
    status_resolver: StatusResolver
    summary_service: DailySummaryService
    clock_service: ClockService
    correction_service: ManualCorrectionService
    team_service: TeamStatusService
    entry_service: TimeEntryService


def build_container(*, db_config: dict, settings: Optional[Any] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    entries_repo = MySQLTimeEntryRepository(conn)
    summaries_repo = MySQLDailySummaryRepository(conn)
    directory_repo = MySQLDirectoryRepository(conn)
    employee_config_repo = MySQLEmployeeConfigRepository(
        conn,
        default_daily_target_minutes=int(
            getattr(settings, "DEFAULT_DAILY_TARGET_MINUTES", DEFAULT_DAILY_TARGET_MINUTES)
        ),
    )
    audit = AuditRecorder(MySQLAuditSink(conn))
    locks = MySQLUserLocks(conn, timeout_seconds=int(getattr(settings, "USER_LOCK_TIMEOUT_SECONDS", 10)))

    employee_config_service = EmployeeConfigService(
        employee_config_repo,
        default_timezone=str(getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)),
    )
    status_resolver = StatusResolver(entries_repo, directory_repo, employee_config_service)
    summary_service = DailySummaryService(
        entries_repo,
        summaries_repo,
        directory_repo,
        employee_config_service,
        rules=ComplianceRules.from_settings(settings),
    )
    clock_service = ClockService(entries_repo, directory_repo, summary_service, audit, locks=locks)
    correction_service = ManualCorrectionService(entries_repo, directory_repo, summary_service, audit, locks=locks)
    team_service = TeamStatusService(directory_repo, entries_repo, status_resolver)
    entry_service = TimeEntryService(entries_repo, directory_repo)

    return Container(
        conn=conn,
        entries_repo=entries_repo,
        summaries_repo=summaries_repo,
        directory_repo=directory_repo,
        employee_config_repo=employee_config_repo,
        employee_config_service=employee_config_service,
        status_resolver=status_resolver,
        summary_service=summary_service,
        clock_service=clock_service,
        correction_service=correction_service,
        team_service=team_service,
        entry_service=entry_service,
    )
