# gitaworld/progress.py
"""
Translation progress per language.

Each language carries two editor-entered counters. When a counter is unset
(or zero) the live row count is shown instead. Nothing here writes back: an
edited counter stays authoritative until an editor changes it again.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from gitaworld.models.language import Language
from gitaworld.models.verse import Verse

TOTAL_VERSES = 700
TOTAL_CHAPTERS = 18


def resolve_count(manual: Optional[int], derived: int) -> int:
    """Manual value wins whenever it is set to something other than zero."""
    if manual:
        return manual
    return derived


def progress_percent(value: int, total: int) -> int:
    if total <= 0 or value <= 0:
        return 0
    return min(round(value / total * 100), 100)


@dataclass(frozen=True)
class LanguageProgress:
    verse_count: int
    chapter_count: int
    derived_verse_count: int
    derived_chapter_count: int
    manual: bool = False

    @property
    def verse_percent(self) -> int:
        return progress_percent(self.verse_count, TOTAL_VERSES)

    @property
    def chapter_percent(self) -> int:
        return progress_percent(self.chapter_count, TOTAL_CHAPTERS)


def derived_counts(db: Session) -> Dict[int, Tuple[int, int]]:
    """language_id -> (verse rows, distinct chapters) over all verse rows."""
    rows = (
        db.query(
            Verse.language_id,
            func.count(Verse.id),
            func.count(distinct(Verse.chapter_id)),
        )
        .group_by(Verse.language_id)
        .all()
    )
    return {language_id: (verses, chapters) for language_id, verses, chapters in rows}


def language_progress(language: Language, derived: Tuple[int, int]) -> LanguageProgress:
    derived_verses, derived_chapters = derived
    return LanguageProgress(
        verse_count=resolve_count(language.manual_verse_count, derived_verses),
        chapter_count=resolve_count(language.manual_chapter_count, derived_chapters),
        derived_verse_count=derived_verses,
        derived_chapter_count=derived_chapters,
        manual=bool(language.manual_verse_count or language.manual_chapter_count),
    )
