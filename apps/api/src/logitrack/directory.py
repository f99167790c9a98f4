from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from logitrack.models import UserRecord


@dataclass(frozen=True)
class DirectoryUser:
    id: str
    role: str
    name: str | None = None
    phone: str | None = None


class UserDirectory(Protocol):
    """Read-only view of the account store that owns users."""

    def find_by_id(self, user_id: str) -> DirectoryUser | None:
        ...


class SqlUserDirectory:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, user_id: str) -> DirectoryUser | None:
        user = self._session.get(UserRecord, user_id)
        if user is None:
            return None
        return DirectoryUser(
            id=user.id,
            role=user.role,
            name=user.full_name or None,
            phone=user.phone,
        )
