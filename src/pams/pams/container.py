from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .anomalies.detector import AnomalyDetector
from .anomalies.mysql_anomaly_repository import MySQLAnomalyRepository
from .anomalies.service import AnomalyService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.settings import EngineSettings
from .database.connection import DBConfig, DatabaseConnection
from .geo.mysql_geofence_repository import MySQLGeoFenceRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .performance.mysql_performance_repository import MySQLPerformanceRepository
from .performance.service import PerformanceService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService
from .users.mysql_company_repository import MySQLCompanyRepository
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    settings: EngineSettings

    users_repo: MySQLUserRepository
    companies_repo: MySQLCompanyRepository
    fences_repo: MySQLGeoFenceRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    tasks_repo: MySQLTaskRepository
    performance_repo: MySQLPerformanceRepository
    anomaly_repo: MySQLAnomalyRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    task_service: TaskService
    performance_service: PerformanceService
    anomaly_service: AnomalyService


def build_container(*, db_config: dict, engine: Optional[Mapping[str, Any]] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    settings = EngineSettings.from_mapping(engine)

    users_repo = MySQLUserRepository(conn)
    companies_repo = MySQLCompanyRepository(conn)
    fences_repo = MySQLGeoFenceRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)
    performance_repo = MySQLPerformanceRepository(conn)
    anomaly_repo = MySQLAnomalyRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        companies_repo,
        fences_repo,
        settings=settings,
        strategy_factory=AttendanceStrategyFactory(),
    )
    leave_service = LeaveService(leaves_repo, settings=settings)
    task_service = TaskService(tasks_repo)
    performance_service = PerformanceService(
        performance_repo, users_repo, attendance_repo, tasks_repo, leaves_repo, settings=settings
    )
    anomaly_service = AnomalyService(
        anomaly_repo,
        users_repo,
        companies_repo,
        attendance_repo,
        tasks_repo,
        leaves_repo,
        settings=settings,
        detector=AnomalyDetector(),
    )

    return Container(
        conn=conn,
        settings=settings,
        users_repo=users_repo,
        companies_repo=companies_repo,
        fences_repo=fences_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        tasks_repo=tasks_repo,
        performance_repo=performance_repo,
        anomaly_repo=anomaly_repo,
        attendance_service=attendance_service,
        leave_service=leave_service,
        task_service=task_service,
        performance_service=performance_service,
        anomaly_service=anomaly_service,
    )
