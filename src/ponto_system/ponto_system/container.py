from __future__ import annotations

from dataclasses import dataclass

from .core.enums import LunchPolicy
from .database.connection import DBConfig, DatabaseConnection
from .punches.factory import AggregatorFactory
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchService
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: UserRepository
    punches_repo: PunchRepository

    auth_service: AuthService
    user_service: UserService
    punch_service: PunchService
    report_service: ReportService


def build_services(
    conn: DatabaseConnection,
    users_repo: UserRepository,
    punches_repo: PunchRepository,
    *,
    settings: dict,
) -> Container:
    """Wire services over the given repositories.

    `settings` uses the same keys as the settings modules (TIMEZONE, PUNCH_SCHEMA, ...).
    """
    aggregator = AggregatorFactory().build(
        schema_name=str(settings.get("PUNCH_SCHEMA", "four_state")),
        lunch_policy=settings.get("LUNCH_POLICY", LunchPolicy.EXCLUDE),
    )

    punch_service = PunchService(
        punches_repo,
        users_repo,
        aggregator,
        timezone=settings.get("TIMEZONE"),
        allow_future=bool(settings.get("ALLOW_FUTURE_PUNCH", False)),
        require_location=bool(settings.get("REQUIRE_LOCATION", False)),
        clock=settings.get("CLOCK"),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        punches_repo=punches_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        punch_service=punch_service,
        report_service=ReportService(
            punches_repo,
            users_repo,
            aggregator,
            timezone=settings.get("TIMEZONE"),
            clock=settings.get("CLOCK"),
        ),
    )


def build_container(*, db_config: dict, settings: dict | None = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        conn,
        MySQLUserRepository(conn),
        MySQLPunchRepository(conn),
        settings=settings or {},
    )
