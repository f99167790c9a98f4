from typing import Any
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from logitrack.directory import DirectoryUser, SqlUserDirectory
from logitrack.errors import (
    GeofenceViolation,
    InvalidDriverId,
    InvalidOrNonDriverUser,
    InvalidStatus,
    JobNotFound,
)
from logitrack.models import JOB_STATUSES, JobRecord
from logitrack.schemas import JobCreateRequest
from logitrack.services import JobLifecycleManager


class StaticDirectory:
    def __init__(self, *users: DirectoryUser) -> None:
        self._users = {user.id: user for user in users}
        self.lookups: list[str] = []

    def find_by_id(self, user_id: str) -> DirectoryUser | None:
        self.lookups.append(user_id)
        return self._users.get(user_id)


def _request(job_payload, driver: str, **overrides: Any) -> JobCreateRequest:
    return JobCreateRequest.model_validate(job_payload(driver, **overrides))


def _job_count(session: Session) -> int:
    return int(session.scalar(select(func.count()).select_from(JobRecord)) or 0)


@pytest.fixture
def manager(session: Session) -> JobLifecycleManager:
    return JobLifecycleManager(session, SqlUserDirectory(session))


def test_create_then_get_round_trips_submitted_fields(manager, job_payload, driver_id) -> None:
    created = manager.create_job(_request(job_payload, driver_id))

    fetched = manager.get_job(created.id)

    assert fetched.driver_id == driver_id
    assert fetched.status == "pending"
    assert (fetched.pickup_latitude, fetched.pickup_longitude) == (27.7172, 85.3240)
    assert (fetched.dropoff_latitude, fetched.dropoff_longitude) == (27.6766, 85.3188)
    assert fetched.pickup_name == "Thamel Warehouse"
    assert fetched.pickup_email == "warehouse@example.com"
    assert fetched.dropoff_email is None
    assert fetched.fragile_items is True
    assert fetched.heavy_item is False
    assert fetched.current_latitude is None
    assert fetched.created_at is not None
    assert fetched.updated_at is not None


def test_create_keeps_explicit_status(manager, job_payload, driver_id) -> None:
    job = manager.create_job(_request(job_payload, driver_id, status="in-transit"))

    assert job.status == "in-transit"


def test_create_stamps_delivered_at_for_delivered_jobs(manager, job_payload, driver_id) -> None:
    job = manager.create_job(_request(job_payload, driver_id, status="delivered"))

    assert job.delivered_at is not None


def test_create_accepts_hyphenated_driver_id(manager, job_payload, driver_id) -> None:
    job = manager.create_job(_request(job_payload, str(uuid.UUID(driver_id))))

    assert job.driver_id == driver_id


def test_create_defaults_driver_snapshot_from_directory(manager, job_payload, driver_id) -> None:
    job = manager.create_job(_request(job_payload, driver_id, driverInfo={"id": driver_id}))

    assert job.driver_name == "Ram Thapa"
    assert job.driver_phone == "9801234567"


@pytest.mark.parametrize("bad_id", [None, "", "not-an-id", "507f1f77bcf86cd799439011"])
def test_create_rejects_malformed_driver_id(manager, job_payload, session, bad_id) -> None:
    with pytest.raises(InvalidDriverId):
        manager.create_job(_request(job_payload, "unused", driverInfo={"id": bad_id}))

    assert _job_count(session) == 0


def test_create_rejects_admin_as_driver(manager, job_payload, admin_id, session) -> None:
    with pytest.raises(InvalidOrNonDriverUser):
        manager.create_job(_request(job_payload, admin_id))

    assert _job_count(session) == 0


def test_create_rejects_unknown_driver(manager, job_payload, session) -> None:
    with pytest.raises(InvalidOrNonDriverUser):
        manager.create_job(_request(job_payload, uuid.uuid4().hex))

    assert _job_count(session) == 0


def test_create_rejects_out_of_region_pickup_without_persisting(manager, job_payload, driver_id, session) -> None:
    pickup = {"name": "Far away", "phone": "1", "latitude": 40.0, "longitude": 100.0}

    with pytest.raises(GeofenceViolation) as excinfo:
        manager.create_job(_request(job_payload, driver_id, pickupInfo=pickup))

    assert excinfo.value.extra["fields"] == ["pickupInfo"]
    assert _job_count(session) == 0


def test_create_reports_every_out_of_region_point(manager, job_payload, driver_id) -> None:
    outside = {"name": "Delhi", "phone": "1", "latitude": 28.61, "longitude": 77.2}

    with pytest.raises(GeofenceViolation) as excinfo:
        manager.create_job(_request(job_payload, driver_id, pickupInfo=outside, dropoffInfo=outside))

    assert excinfo.value.extra["fields"] == ["pickupInfo", "dropoffInfo"]


def test_create_leaves_current_unchecked_by_default(manager, job_payload, driver_id) -> None:
    job = manager.create_job(
        _request(job_payload, driver_id, currentCoords={"latitude": 40.0, "longitude": 100.0})
    )

    assert (job.current_latitude, job.current_longitude) == (40.0, 100.0)


def test_create_checks_current_when_enforced(session, job_payload, driver_id) -> None:
    manager = JobLifecycleManager(session, SqlUserDirectory(session), enforce_current=True)

    with pytest.raises(GeofenceViolation) as excinfo:
        manager.create_job(
            _request(job_payload, driver_id, currentCoords={"latitude": 40.0, "longitude": 100.0})
        )

    assert excinfo.value.extra["fields"] == ["currentCoords"]
    assert _job_count(session) == 0


def test_create_rejects_unknown_status(manager, job_payload, driver_id, session) -> None:
    with pytest.raises(InvalidStatus):
        manager.create_job(_request(job_payload, driver_id, status="lost"))

    assert _job_count(session) == 0


def test_create_resolves_driver_through_injected_directory(session, job_payload) -> None:
    driver = DirectoryUser(id=uuid.uuid4().hex, role="driver", name="Hari", phone="9800000000")
    directory = StaticDirectory(driver)
    manager = JobLifecycleManager(session, directory)

    # The users table is empty; only the directory knows this driver.
    job = manager.create_job(_request(job_payload, driver.id, driverInfo={"id": driver.id}))

    assert directory.lookups == [driver.id]
    assert job.driver_name == "Hari"


def test_get_job_raises_for_unknown_id(manager) -> None:
    with pytest.raises(JobNotFound):
        manager.get_job("missing")


@pytest.mark.parametrize("current", JOB_STATUSES)
def test_update_status_rejects_bogus_value_in_every_state(manager, seed_job, current) -> None:
    job_id = seed_job(status=current)

    with pytest.raises(InvalidStatus):
        manager.update_status(job_id, "bogus")

    assert manager.get_job(job_id).status == current


@pytest.mark.parametrize("value", [None, "", "Delivered", "in_transit"])
def test_update_status_rejects_missing_or_misspelled_value(manager, seed_job, value) -> None:
    job_id = seed_job()

    with pytest.raises(InvalidStatus):
        manager.update_status(job_id, value)


def test_update_status_checks_value_before_lookup(manager) -> None:
    with pytest.raises(InvalidStatus):
        manager.update_status("missing", "bogus")


def test_update_status_raises_for_unknown_job(manager) -> None:
    with pytest.raises(JobNotFound):
        manager.update_status("missing", "delivered")


def test_update_status_sets_value_and_bumps_updated_at(manager, seed_job) -> None:
    job_id = seed_job()
    before = manager.get_job(job_id).updated_at

    job = manager.update_status(job_id, "in-transit")

    assert job.status == "in-transit"
    assert job.updated_at > before


def test_update_status_allows_any_transition(manager, seed_job) -> None:
    job_id = seed_job(status="delivered")

    assert manager.update_status(job_id, "pending").status == "pending"
    assert manager.update_status(job_id, "cancelled").status == "cancelled"
    assert manager.update_status(job_id, "in-transit").status == "in-transit"


def test_delivered_at_follows_delivered_status(manager, seed_job) -> None:
    job_id = seed_job(status="in-transit")

    delivered = manager.update_status(job_id, "delivered")
    assert delivered.delivered_at is not None

    reopened = manager.update_status(job_id, "delayed")
    assert reopened.delivered_at is None
