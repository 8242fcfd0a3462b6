"""User role model."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from social_auth_facebook.db.base import Base


class Role(Base):
    """A user role that can be assigned to site accounts.

    Roles are managed elsewhere; this service only reads them to build the
    list of roles that may be excluded from Facebook login.
    """

    __tablename__ = "roles"

    # Machine name, e.g. "administrator"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    # Human readable label
    label: Mapped[str] = mapped_column(String(255), nullable=False)

    # Sort order in role listings
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Role {self.id}>"
