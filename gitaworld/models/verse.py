from __future__ import annotations

import datetime as dt
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy import orm

from gitaworld.db.base import Base
from gitaworld.models.enums import VERSE_STATUS_TYPE, VISIBILITY_TYPE, Visibility, VerseStatus, toggled_visibility


class Verse(Base):
    """
    One verse of one chapter, in one language.

    `status` tracks the video production pipeline and `visibility` tracks
    publication; the two are set independently.
    """

    __tablename__ = "verses"

    id: orm.Mapped[int] = orm.mapped_column(sa.Integer, primary_key=True, autoincrement=True)

    chapter_id: orm.Mapped[int] = orm.mapped_column(
        sa.Integer, sa.ForeignKey("chapters.id", ondelete="CASCADE"), index=True, nullable=False
    )
    language_id: orm.Mapped[int] = orm.mapped_column(
        sa.Integer, sa.ForeignKey("languages.id", ondelete="CASCADE"), index=True, nullable=False
    )
    verse_number: orm.Mapped[int] = orm.mapped_column(sa.Integer, nullable=False)

    title: orm.Mapped[Optional[str]] = orm.mapped_column(sa.String(240), nullable=True)
    description: orm.Mapped[Optional[str]] = orm.mapped_column(sa.Text, nullable=True)
    sanskrit_text: orm.Mapped[Optional[str]] = orm.mapped_column(sa.Text, nullable=True)
    transliteration: orm.Mapped[Optional[str]] = orm.mapped_column(sa.Text, nullable=True)
    english_translation: orm.Mapped[Optional[str]] = orm.mapped_column(sa.Text, nullable=True)
    commentary: orm.Mapped[Optional[str]] = orm.mapped_column(sa.Text, nullable=True)

    youtube_url: orm.Mapped[Optional[str]] = orm.mapped_column(sa.String(400), nullable=True)
    video_file_path: orm.Mapped[Optional[str]] = orm.mapped_column(sa.String(1024), nullable=True)

    status: orm.Mapped[VerseStatus] = orm.mapped_column(
        VERSE_STATUS_TYPE,
        nullable=False,
        default=VerseStatus.PENDING,
        server_default=VerseStatus.PENDING.value,
    )
    visibility: orm.Mapped[Visibility] = orm.mapped_column(
        VISIBILITY_TYPE,
        nullable=False,
        default=Visibility.DRAFT,
        server_default=Visibility.DRAFT.value,
        index=True,
    )

    is_daily_verse: orm.Mapped[bool] = orm.mapped_column(
        sa.Boolean, nullable=False, default=False, server_default=sa.false()
    )
    whatsapp_share_text: orm.Mapped[Optional[str]] = orm.mapped_column(sa.Text, nullable=True)
    keywords: orm.Mapped[Optional[List[str]]] = orm.mapped_column(sa.JSON, nullable=True)

    created_by: orm.Mapped[Optional[int]] = orm.mapped_column(
        sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now()
    )
    updated_at: orm.Mapped[Optional[dt.datetime]] = orm.mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()
    )

    chapter = orm.relationship("Chapter", back_populates="verses")
    language = orm.relationship("Language", back_populates="verses")

    __table_args__ = (
        sa.UniqueConstraint("chapter_id", "language_id", "verse_number", name="uq_verse_chapter_language_number"),
        sa.Index("ix_verses_chapter_visibility", "chapter_id", "visibility"),
    )

    @property
    def keywords_text(self) -> str:
        return ", ".join(self.keywords or [])

    def toggle_visibility(self) -> Visibility:
        self.visibility = toggled_visibility(self.visibility)
        return self.visibility

    def __repr__(self) -> str:
        return (
            f"<Verse id={self.id} chapter_id={self.chapter_id} "
            f"language_id={self.language_id} number={self.verse_number}>"
        )
