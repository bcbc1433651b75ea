# gitaworld/schemas.py
"""
Validated command objects for every admin mutation.

Routers collect raw form strings, build one of these, and only touch the
database once validation has passed.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from gitaworld.models.enums import Role, Visibility, VerseStatus
from gitaworld.progress import TOTAL_CHAPTERS, TOTAL_VERSES


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        if v == "":
            return None
    return v


def _checkbox(v) -> bool:
    # HTML checkboxes post "on" when ticked and nothing otherwise
    if isinstance(v, str):
        return v.strip().lower() in ("on", "true", "1", "yes")
    return bool(v)


def validation_message(exc: ValidationError) -> str:
    """First error as a single human-readable line."""
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
    msg = err.get("msg", "Invalid value")
    return f"{field.replace('_', ' ').capitalize()}: {msg}" if field else msg


class ChapterCommand(BaseModel):
    chapter_number: int = Field(ge=1, le=TOTAL_CHAPTERS)
    title: str = Field(min_length=1, max_length=200)
    sanskrit_title: Optional[str] = Field(default=None, max_length=200)
    english_title: Optional[str] = Field(default=None, max_length=240)
    total_verses: Optional[int] = Field(default=None, ge=0)
    summary: Optional[str] = None
    description: Optional[str] = None
    visibility: Visibility = Visibility.DRAFT
    sort_order: int = 0

    @field_validator(
        "chapter_number", "title", "sanskrit_title", "english_title",
        "total_verses", "summary", "description",
        mode="before",
    )
    @classmethod
    def _strip(cls, v):
        return _blank_to_none(v)

    @field_validator("visibility", mode="before")
    @classmethod
    def _default_visibility(cls, v):
        v = _blank_to_none(v)
        return Visibility.DRAFT if v is None else v

    @field_validator("sort_order", mode="before")
    @classmethod
    def _default_sort(cls, v):
        v = _blank_to_none(v)
        return 0 if v is None else v


class LanguageCommand(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    code: str = Field(min_length=1, max_length=5)
    native_name: Optional[str] = Field(default=None, max_length=120)
    is_active: bool = False
    manual_verse_count: Optional[int] = Field(default=None, ge=0, le=TOTAL_VERSES)
    manual_chapter_count: Optional[int] = Field(default=None, ge=0, le=TOTAL_CHAPTERS)

    @field_validator("name", "code", "native_name", "manual_verse_count", "manual_chapter_count", mode="before")
    @classmethod
    def _strip(cls, v):
        return _blank_to_none(v)

    @field_validator("code")
    @classmethod
    def _lower_code(cls, v: str) -> str:
        return v.lower()

    @field_validator("is_active", mode="before")
    @classmethod
    def _active(cls, v):
        return _checkbox(v)

    @field_validator("manual_verse_count", "manual_chapter_count")
    @classmethod
    def _zero_is_unset(cls, v: Optional[int]) -> Optional[int]:
        # Storing NULL hands the display back to the live count
        return v or None


class VerseCommand(BaseModel):
    chapter_id: int
    language_id: int
    verse_number: int = Field(ge=1)
    title: Optional[str] = Field(default=None, max_length=240)
    description: Optional[str] = None
    sanskrit_text: Optional[str] = None
    transliteration: Optional[str] = None
    english_translation: Optional[str] = None
    commentary: Optional[str] = None
    youtube_url: Optional[str] = Field(default=None, max_length=400)
    video_file_path: Optional[str] = Field(default=None, max_length=1024)
    status: VerseStatus = VerseStatus.PENDING
    visibility: Visibility = Visibility.DRAFT
    is_daily_verse: bool = False
    whatsapp_share_text: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)

    @field_validator(
        "chapter_id", "language_id", "verse_number", "title", "description",
        "sanskrit_text", "transliteration", "english_translation", "commentary",
        "youtube_url", "video_file_path", "whatsapp_share_text",
        mode="before",
    )
    @classmethod
    def _strip(cls, v):
        return _blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        v = _blank_to_none(v)
        return VerseStatus.PENDING if v is None else v

    @field_validator("visibility", mode="before")
    @classmethod
    def _default_visibility(cls, v):
        v = _blank_to_none(v)
        return Visibility.DRAFT if v is None else v

    @field_validator("is_daily_verse", mode="before")
    @classmethod
    def _daily(cls, v):
        return _checkbox(v)

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [k.strip() for k in v.split(",") if k.strip()]
        return v


class RoleCommand(BaseModel):
    role: Role
