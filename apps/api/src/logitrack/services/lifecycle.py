"""Creation-time invariants and status updates for delivery jobs.

Status changes are deliberately permissive: an admin may move a job from any
status to any other status, so long as the target is one of
``JOB_STATUSES``. ``delivered`` and ``cancelled`` are terminal in the
workflow sense only; nothing here blocks a later correction.
"""

from __future__ import annotations

import logging
from typing import Any
import uuid

from sqlalchemy.orm import Session

from logitrack.directory import UserDirectory
from logitrack.errors import (
    GeofenceViolation,
    InvalidDriverId,
    InvalidOrNonDriverUser,
    InvalidStatus,
    JobNotFound,
)
from logitrack.geofence import NEPAL, BoundingBox, is_within_region
from logitrack.models import (
    DEFAULT_JOB_PRIORITY,
    DEFAULT_JOB_STATUS,
    JOB_STATUSES,
    ROLE_DRIVER,
    JobRecord,
    utcnow,
)
from logitrack.schemas import Coordinates, JobCreateRequest
from logitrack.services.queries import JobQuery

logger = logging.getLogger(__name__)


def parse_status(value: str | None) -> str:
    if not value or value not in JOB_STATUSES:
        raise InvalidStatus()
    return value


def parse_driver_id(value: str | None) -> str:
    if not value or not isinstance(value, str):
        raise InvalidDriverId()
    try:
        return uuid.UUID(value.strip()).hex
    except ValueError as exc:
        raise InvalidDriverId() from exc


class JobLifecycleManager:
    def __init__(
        self,
        session: Session,
        directory: UserDirectory,
        *,
        region: BoundingBox = NEPAL,
        enforce_current: bool = False,
    ) -> None:
        self._session = session
        self._directory = directory
        self._region = region
        self._enforce_current = enforce_current

    def _check_region(self, named: dict[str, Coordinates | None]) -> None:
        outside = [
            field
            for field, point in named.items()
            if point is not None and not is_within_region(point.latitude, point.longitude, self._region)
        ]
        if outside:
            logger.warning("rejected coordinates outside service region fields=%s", outside)
            raise GeofenceViolation(
                f"{', '.join(outside)} coordinates must be within the service region",
                fields=outside,
            )

    def create_job(self, request: JobCreateRequest) -> JobRecord:
        driver_id = parse_driver_id(request.driver_info.id)

        driver = self._directory.find_by_id(driver_id)
        if driver is None or driver.role != ROLE_DRIVER:
            raise InvalidOrNonDriverUser()

        checked: dict[str, Coordinates | None] = {
            "pickupInfo": request.pickup_info,
            "dropoffInfo": request.dropoff_info,
        }
        if self._enforce_current:
            checked["currentCoords"] = request.current_coords
        self._check_region(checked)

        status = DEFAULT_JOB_STATUS if request.status is None else parse_status(request.status)
        now = utcnow()
        current = request.current_coords

        job = JobRecord(
            driver_id=driver.id,
            driver_name=request.driver_info.name or driver.name,
            driver_phone=request.driver_info.phone or driver.phone,
            pickup_name=request.pickup_info.name,
            pickup_phone=request.pickup_info.phone,
            pickup_email=request.pickup_info.email,
            pickup_latitude=request.pickup_info.latitude,
            pickup_longitude=request.pickup_info.longitude,
            dropoff_name=request.dropoff_info.name,
            dropoff_phone=request.dropoff_info.phone,
            dropoff_email=request.dropoff_info.email,
            dropoff_latitude=request.dropoff_info.latitude,
            dropoff_longitude=request.dropoff_info.longitude,
            current_latitude=current.latitude if current is not None else None,
            current_longitude=current.longitude if current is not None else None,
            status=status,
            priority=request.priority or DEFAULT_JOB_PRIORITY,
            is_urgent=request.is_urgent,
            note=request.note,
            fragile_items=request.add_ons.fragile_items,
            heavy_item=request.add_ons.heavy_item,
            created_at=now,
            updated_at=now,
            delivered_at=now if status == "delivered" else None,
        )
        self._session.add(job)
        self._session.commit()
        self._session.refresh(job)

        logger.info("job created job_id=%s driver_id=%s status=%s", job.id, job.driver_id, job.status)
        return job

    def get_job(self, job_id: str) -> JobRecord:
        job = self._session.get(JobRecord, job_id)
        if job is None:
            raise JobNotFound()
        return job

    def update_status(self, job_id: str, new_status: str | None) -> JobRecord:
        status = parse_status(new_status)
        job = self.get_job(job_id)

        previous = job.status
        now = utcnow()
        job.status = status
        if status == "delivered":
            if previous != "delivered" or job.delivered_at is None:
                job.delivered_at = now
        else:
            job.delivered_at = None
        job.updated_at = now
        self._session.commit()
        self._session.refresh(job)

        logger.info("job status changed job_id=%s from=%s to=%s", job.id, previous, status)
        return job

    def list_jobs(self, **filters: Any) -> list[JobRecord]:
        return JobQuery(self._session).list_jobs(**filters)
