from sqlalchemy import Boolean, Column, Integer, String, DateTime, func, true
from sqlalchemy.orm import relationship

from gitaworld.db.base import Base


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(5), unique=True, index=True, nullable=False)
    name = Column(String(120), nullable=False)
    native_name = Column(String(120), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    # Editor-entered progress. NULL means "fall back to the live row count".
    manual_verse_count = Column(Integer, nullable=True)
    manual_chapter_count = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    verses = relationship(
        "Verse",
        back_populates="language",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Language {self.code}>"
