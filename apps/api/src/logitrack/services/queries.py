"""Read-side views over the job collection used by dispatch dashboards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ColumnElement, func, not_, or_, select
from sqlalchemy.orm import Session

from logitrack.models import JobRecord

SEARCH_COLUMNS = (
    JobRecord.driver_name,
    JobRecord.driver_phone,
    JobRecord.pickup_name,
    JobRecord.pickup_phone,
    JobRecord.pickup_email,
    JobRecord.dropoff_name,
    JobRecord.dropoff_phone,
    JobRecord.dropoff_email,
)


@dataclass(frozen=True)
class JobSummary:
    in_transit: int
    pending: int
    urgent: int
    delivered_today: int

    def to_dict(self) -> dict[str, int]:
        return {
            "inTransit": self.in_transit,
            "pending": self.pending,
            "urgent": self.urgent,
            "deliveredToday": self.delivered_today,
        }


def start_of_local_day(now: datetime | None = None) -> datetime:
    """Midnight of the server-local calendar day containing ``now``, in UTC."""
    local_now = (now or datetime.now(timezone.utc)).astimezone()
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _urgent_condition() -> ColumnElement[bool]:
    return or_(JobRecord.is_urgent.is_(True), JobRecord.priority == "high")


def job_conditions(
    *,
    status: str | None = None,
    search: str | None = None,
    priority: str | None = None,
    urgent: bool | None = None,
    driver_id: str | None = None,
    delivered_since: datetime | None = None,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if status:
        conditions.append(JobRecord.status == status)
    if priority:
        conditions.append(JobRecord.priority == priority)
    if urgent is not None:
        conditions.append(_urgent_condition() if urgent else not_(_urgent_condition()))
    if driver_id:
        conditions.append(JobRecord.driver_id == driver_id)
    if delivered_since is not None:
        conditions.append(JobRecord.status == "delivered")
        conditions.append(JobRecord.delivered_at >= delivered_since)
    if search is not None and search.strip():
        pattern = _like_pattern(search.strip())
        conditions.append(or_(*(column.ilike(pattern, escape="\\") for column in SEARCH_COLUMNS)))
    return conditions


class JobQuery:
    def __init__(self, session: Session) -> None:
        self._session = session

    def list_jobs(self, **filters: Any) -> list[JobRecord]:
        stmt = (
            select(JobRecord)
            .where(*job_conditions(**filters))
            .order_by(JobRecord.created_at.desc(), JobRecord.id.desc())
        )
        return list(self._session.scalars(stmt).all())

    def list_jobs_for_driver(self, driver_id: str) -> list[JobRecord]:
        return self.list_jobs(driver_id=driver_id)

    def count_jobs(self, **filters: Any) -> int:
        stmt = select(func.count()).select_from(JobRecord).where(*job_conditions(**filters))
        return int(self._session.scalar(stmt) or 0)

    def summary(self, now: datetime | None = None) -> JobSummary:
        return JobSummary(
            in_transit=self.count_jobs(status="in-transit"),
            pending=self.count_jobs(status="pending"),
            urgent=self.count_jobs(urgent=True),
            delivered_today=self.count_jobs(delivered_since=start_of_local_day(now)),
        )
