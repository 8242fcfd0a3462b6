"""Named configuration object model."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from social_auth_facebook.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConfigObject(Base):
    """Stores one named configuration object per row.

    The whole object is kept as a single JSON-encoded document so that a
    save replaces every key at once.
    """

    __tablename__ = "config"

    # Dotted configuration name, e.g. "social_auth_facebook.settings"
    name: Mapped[str] = mapped_column(String(255), primary_key=True)

    # JSON-encoded mapping of keys to values
    data: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
