from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Annotated, Any, Callable

from fastapi import Depends, Header
import jwt

from logitrack.config import get_settings
from logitrack.errors import AuthenticationError, AuthorizationError, LogiTrackError
from logitrack.models import ROLE_ADMIN, ROLE_DRIVER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    role: str


def _bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthenticationError()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError()
    return token


def decode_identity(token: str) -> Identity:
    settings = get_settings()
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured")
        raise LogiTrackError("Server error during authentication")

    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid Token") from exc

    subject = claims.get("id") or claims.get("_id") or claims.get("sub")
    role = claims.get("role")
    if not subject or not isinstance(role, str):
        raise AuthenticationError("Invalid Token")
    return Identity(id=str(subject), role=role)


def get_identity(authorization: Annotated[str | None, Header()] = None) -> Identity:
    return decode_identity(_bearer_token(authorization))


def require_roles(*roles: str) -> Callable[..., Identity]:
    allowed = frozenset(roles)

    def dependency(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        if identity.role not in allowed:
            raise AuthorizationError()
        return identity

    return dependency


require_admin = require_roles(ROLE_ADMIN)
require_driver_or_admin = require_roles(ROLE_DRIVER, ROLE_ADMIN)
