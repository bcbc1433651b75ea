from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import relationship

from gitaworld.db.base import Base
from gitaworld.models.enums import VISIBILITY_TYPE, Visibility, toggled_visibility


class Chapter(Base):
    __tablename__ = "chapters"

    id = Column(Integer, primary_key=True, index=True)
    chapter_number = Column(Integer, unique=True, index=True, nullable=False)
    title = Column(String(200), nullable=False)
    sanskrit_title = Column(String(200), nullable=True)
    english_title = Column(String(240), nullable=True)

    # Editorial hint only; not derived from the verse rows
    total_verses = Column(Integer, nullable=True)

    summary = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    visibility = Column(
        VISIBILITY_TYPE,
        nullable=False,
        default=Visibility.DRAFT,
        server_default=Visibility.DRAFT.value,
        index=True,
    )
    sort_order = Column(Integer, nullable=False, default=0, server_default="0", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    verses = relationship(
        "Verse",
        back_populates="chapter",
        cascade="all, delete-orphan",
    )

    def toggle_visibility(self) -> Visibility:
        self.visibility = toggled_visibility(self.visibility)
        return self.visibility

    def __repr__(self) -> str:
        return f"<Chapter {self.chapter_number} {self.visibility.value if self.visibility else None}>"
