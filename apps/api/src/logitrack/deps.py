from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from logitrack.config import get_settings
from logitrack.db import get_session
from logitrack.directory import SqlUserDirectory, UserDirectory
from logitrack.geofence import BoundingBox
from logitrack.services import CoordinateService, JobLifecycleManager, JobQuery

SessionDep = Annotated[Session, Depends(get_session)]


def get_user_directory(session: SessionDep) -> UserDirectory:
    return SqlUserDirectory(session)


def get_lifecycle_manager(
    session: SessionDep,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
) -> JobLifecycleManager:
    settings = get_settings()
    return JobLifecycleManager(
        session,
        directory,
        region=BoundingBox.from_settings(settings),
        enforce_current=settings.geofence_enforce_current,
    )


def get_coordinate_service(session: SessionDep) -> CoordinateService:
    settings = get_settings()
    return CoordinateService(
        session,
        region=BoundingBox.from_settings(settings),
        enforce_region=settings.geofence_enforce_current,
    )


def get_job_query(session: SessionDep) -> JobQuery:
    return JobQuery(session)
