from typing import Annotated, Any

from fastapi import APIRouter, Depends

from logitrack.auth import Identity, require_driver_or_admin
from logitrack.deps import get_coordinate_service
from logitrack.schemas import CoordinateUpdateRequest
from logitrack.services import CoordinateService
from logitrack.views import job_detail

router = APIRouter(prefix="/coordinate", tags=["coordinates"])

Coordinates = Annotated[CoordinateService, Depends(get_coordinate_service)]
DriverOrAdmin = Annotated[Identity, Depends(require_driver_or_admin)]


@router.patch("/updateCoord/{job_id}")
def update_live_coordinate(
    job_id: str,
    request: CoordinateUpdateRequest,
    service: Coordinates,
    _: DriverOrAdmin,
) -> dict[str, Any]:
    job = service.update_current(job_id, request.current_coords)
    return {"success": True, "message": "Job updated successfully", "job": job_detail(job)}


@router.get("/getLiveCoord/{job_id}")
def get_live_coordinate(job_id: str, service: Coordinates, _: DriverOrAdmin) -> dict[str, Any]:
    return {
        "success": True,
        "message": "Live coordinate fetched successfully",
        "coordinate": service.get_current(job_id),
    }


@router.get("/getCoord/{job_id}")
def get_coordinates(job_id: str, service: Coordinates, _: DriverOrAdmin) -> dict[str, Any]:
    return {
        "success": True,
        "message": "Coordinates fetched successfully",
        "coordinates": service.get_static(job_id),
    }


# Public: used by customer tracking links.
@router.get("/getAllCoord/{job_id}")
def get_all_coordinates(job_id: str, service: Coordinates) -> dict[str, Any]:
    return {
        "success": True,
        "message": "Job coordinates fetched successfully",
        "data": service.get_all(job_id),
    }
