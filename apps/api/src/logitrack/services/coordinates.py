from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from logitrack.errors import GeofenceViolation, JobNotFound
from logitrack.geofence import NEPAL, BoundingBox, is_within_region
from logitrack.models import JobRecord, utcnow
from logitrack.schemas import Coordinates
from logitrack import views

logger = logging.getLogger(__name__)


class CoordinateService:
    """Live position writes from driver devices and coordinate read paths.

    Writes replace both halves of the current position in one UPDATE, so two
    devices reporting for the same job resolve as last-writer-wins.
    """

    def __init__(
        self,
        session: Session,
        *,
        region: BoundingBox = NEPAL,
        enforce_region: bool = False,
    ) -> None:
        self._session = session
        self._region = region
        self._enforce_region = enforce_region

    def _load(self, job_id: str) -> JobRecord:
        job = self._session.get(JobRecord, job_id)
        if job is None:
            raise JobNotFound()
        return job

    def update_current(self, job_id: str, current: Coordinates) -> JobRecord:
        if self._enforce_region and not is_within_region(current.latitude, current.longitude, self._region):
            logger.warning("rejected live coordinate outside service region job_id=%s", job_id)
            raise GeofenceViolation(
                "currentCoords coordinates must be within the service region",
                fields=["currentCoords"],
            )

        result = self._session.execute(
            update(JobRecord)
            .where(JobRecord.id == job_id)
            .values(
                current_latitude=current.latitude,
                current_longitude=current.longitude,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self._session.rollback()
            raise JobNotFound()
        self._session.commit()

        logger.debug("live coordinate updated job_id=%s", job_id)
        return self._load(job_id)

    def get_current(self, job_id: str) -> dict[str, float] | None:
        return views.current_coords(self._load(job_id))

    def get_static(self, job_id: str) -> dict[str, dict[str, float]]:
        job = self._load(job_id)
        return {
            "pickupCoordinates": {
                "latitude": job.pickup_latitude,
                "longitude": job.pickup_longitude,
            },
            "dropoffCoordinates": {
                "latitude": job.dropoff_latitude,
                "longitude": job.dropoff_longitude,
            },
        }

    def get_all(self, job_id: str) -> dict[str, Any]:
        job = self._load(job_id)
        return {
            "jobId": job.id,
            "pickupInfo": views.pickup_info(job),
            "dropoffInfo": views.dropoff_info(job),
            "currentCoords": views.current_coords(job),
        }
