from __future__ import annotations

import datetime as dt
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import orm

from gitaworld.db.base import Base
from gitaworld.models.enums import ROLE_TYPE, Role


class Profile(Base):
    """Display name and role for an account. Shares its primary key with `users`."""

    __tablename__ = "profiles"

    id: orm.Mapped[int] = orm.mapped_column(
        sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    full_name: orm.Mapped[Optional[str]] = orm.mapped_column(sa.String(200), nullable=True)
    role: orm.Mapped[Role] = orm.mapped_column(
        ROLE_TYPE,
        nullable=False,
        default=Role.VIEWER,
        server_default=Role.VIEWER.value,
    )

    created_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )
    updated_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()
    )

    user = orm.relationship("User", back_populates="profile")

    def __repr__(self) -> str:
        return f"<Profile id={self.id} role={self.role.value if self.role else None}>"
