from datetime import datetime, timezone
import uuid

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from logitrack.db import Base

JOB_STATUSES = ("pending", "in-transit", "delayed", "delivered", "cancelled")
DEFAULT_JOB_STATUS = "pending"
JOB_PRIORITIES = ("low", "medium", "high")
DEFAULT_JOB_PRIORITY = "medium"
ROLE_ADMIN = "admin"
ROLE_DRIVER = "driver"
USER_ROLES = (ROLE_ADMIN, ROLE_DRIVER)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    role: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        server_default=text("'driver'"),
    )
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class JobRecord(Base):
    __tablename__ = "jobs"
    __table_args__ = (Index("ix_jobs_status_created_at", "status", "created_at"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)

    driver_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    driver_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    driver_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    pickup_name: Mapped[str] = mapped_column(String(255), nullable=False)
    pickup_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    pickup_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pickup_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    pickup_longitude: Mapped[float] = mapped_column(Float, nullable=False)

    dropoff_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dropoff_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    dropoff_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dropoff_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    dropoff_longitude: Mapped[float] = mapped_column(Float, nullable=False)

    current_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    current_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DEFAULT_JOB_STATUS,
        server_default=text("'pending'"),
    )
    priority: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=DEFAULT_JOB_PRIORITY,
        server_default=text("'medium'"),
    )
    is_urgent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    fragile_items: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )
    heavy_item: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
