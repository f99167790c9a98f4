from datetime import datetime, timezone
from typing import Any

from logitrack.models import JobRecord


def _to_iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        # SQLite hands back naive values; they are stored as UTC.
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def coordinates(latitude: float | None, longitude: float | None) -> dict[str, float] | None:
    if latitude is None or longitude is None:
        return None
    return {"latitude": latitude, "longitude": longitude}


def pickup_info(job: JobRecord) -> dict[str, Any]:
    return {
        "name": job.pickup_name,
        "phone": job.pickup_phone,
        "email": job.pickup_email,
        "latitude": job.pickup_latitude,
        "longitude": job.pickup_longitude,
    }


def dropoff_info(job: JobRecord) -> dict[str, Any]:
    return {
        "name": job.dropoff_name,
        "phone": job.dropoff_phone,
        "email": job.dropoff_email,
        "latitude": job.dropoff_latitude,
        "longitude": job.dropoff_longitude,
    }


def current_coords(job: JobRecord) -> dict[str, float] | None:
    return coordinates(job.current_latitude, job.current_longitude)


def job_detail(job: JobRecord) -> dict[str, Any]:
    return {
        "id": job.id,
        "driverInfo": {
            "id": job.driver_id,
            "name": job.driver_name,
            "phone": job.driver_phone,
        },
        "pickupInfo": pickup_info(job),
        "dropoffInfo": dropoff_info(job),
        "currentCoords": current_coords(job),
        "status": job.status,
        "priority": job.priority,
        "isUrgent": job.is_urgent,
        "note": job.note,
        "addOns": {
            "fragileItems": job.fragile_items,
            "heavyItem": job.heavy_item,
        },
        "createdAt": _to_iso(job.created_at),
        "updatedAt": _to_iso(job.updated_at),
        "deliveredAt": _to_iso(job.delivered_at),
    }
