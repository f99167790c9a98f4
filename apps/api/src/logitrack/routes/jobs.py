from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from logitrack.auth import Identity, get_identity, require_admin, require_driver_or_admin
from logitrack.deps import get_job_query, get_lifecycle_manager
from logitrack.schemas import JobCreateRequest, StatusUpdateRequest
from logitrack.services import JobLifecycleManager, JobQuery
from logitrack.services.lifecycle import parse_driver_id
from logitrack.views import job_detail

router = APIRouter(prefix="/job", tags=["jobs"])

Manager = Annotated[JobLifecycleManager, Depends(get_lifecycle_manager)]
Queries = Annotated[JobQuery, Depends(get_job_query)]


@router.post("/createJob", status_code=201)
@router.post("", status_code=201, include_in_schema=False)
def create_job(
    request: JobCreateRequest,
    manager: Manager,
    _: Annotated[Identity, Depends(require_admin)],
) -> JSONResponse:
    job = manager.create_job(request)
    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "Job created successfully", "job": job_detail(job)},
    )


# Serve both slash and no-slash to avoid 307 redirects.
@router.get("")
@router.get("/", include_in_schema=False)
def list_jobs(
    queries: Queries,
    status: str | None = Query(default=None),
    search: str | None = Query(default=None),
    priority: str | None = Query(default=None),
    urgent: bool | None = Query(default=None),
) -> dict[str, Any]:
    jobs = queries.list_jobs(status=status, search=search, priority=priority, urgent=urgent)
    return {
        "success": True,
        "message": "Jobs fetched successfully",
        "count": len(jobs),
        "jobs": [job_detail(job) for job in jobs],
    }


@router.get("/summary")
def job_summary(
    queries: Queries,
    _: Annotated[Identity, Depends(get_identity)],
) -> dict[str, Any]:
    return {
        "success": True,
        "message": "Summary fetched successfully",
        "data": queries.summary().to_dict(),
    }


@router.get("/getJobForDriver/{driver_id}")
def list_jobs_for_driver(driver_id: str, queries: Queries) -> dict[str, Any]:
    jobs = queries.list_jobs_for_driver(parse_driver_id(driver_id))
    return {
        "success": True,
        "message": "Jobs fetched successfully",
        "count": len(jobs),
        "jobs": [job_detail(job) for job in jobs],
    }


@router.get("/getJobById/{job_id}")
@router.get("/{job_id}", include_in_schema=False)
def get_job(
    job_id: str,
    manager: Manager,
    _: Annotated[Identity, Depends(require_driver_or_admin)],
) -> dict[str, Any]:
    return {"success": True, "message": "Job fetched successfully", "job": job_detail(manager.get_job(job_id))}


@router.patch("/{job_id}/status")
def update_status(
    job_id: str,
    request: StatusUpdateRequest,
    manager: Manager,
    _: Annotated[Identity, Depends(require_admin)],
) -> dict[str, Any]:
    job = manager.update_status(job_id, request.status)
    return {"success": True, "message": "Job updated successfully", "job": job_detail(job)}
