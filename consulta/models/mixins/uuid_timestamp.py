# Standard library imports
from datetime import UTC, datetime
import uuid

# Third-party imports
from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(UTC)


class UUIDTimeStampMixin:
    """A reusable mixin that:
    - Provides a UUID primary key named 'id'
    - Includes created_at and updated_at timestamps, set from Python so every
      dialect stores UTC values (updated_at is refreshed on every UPDATE)

    This mixin is abstract and is not mapped as its own table.
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )
