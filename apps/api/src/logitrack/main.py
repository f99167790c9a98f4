import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from logitrack.config import get_settings
from logitrack.db import get_engine
from logitrack.errors import LogiTrackError, StoreError, ValidationError
from logitrack.routes import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title="LogiTrack API", version="0.1.0")
app.include_router(api_router)


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    get_engine()


def _field_name(location: tuple[Any, ...]) -> str:
    parts = [str(part) for part in location if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


@app.exception_handler(LogiTrackError)
def handle_domain_error(request: Request, exc: LogiTrackError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(tuple(error.get("loc", ()))), "message": error.get("msg", "invalid")}
        for error in exc.errors()
    ]
    fields = sorted({error["field"] for error in errors})
    failure = ValidationError(f"Validation error: {', '.join(fields)}", errors=errors)
    return JSONResponse(status_code=failure.status_code, content=failure.to_payload())


@app.exception_handler(SQLAlchemyError)
def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("store failure method=%s path=%s", request.method, request.url.path)
    failure = StoreError(error=str(exc))
    return JSONResponse(status_code=failure.status_code, content=failure.to_payload())


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("logitrack.main:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":
    run()
