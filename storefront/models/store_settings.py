"""Store Settings ORM — one row holding the admin-editable store configuration.

Invariants:
    - At most one row exists (id == STORE_SETTINGS_ID)
    - overrides holds only keys an admin has saved; defaults fill the rest on read
    - overrides is replaced wholesale on save, never mutated in place
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base

STORE_SETTINGS_ID = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoreSettings(Base):
    __tablename__ = "store_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=STORE_SETTINGS_ID)
    overrides: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
