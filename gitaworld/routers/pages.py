# gitaworld/routers/pages.py
"""
Public, read-only pages.

Every query here filters on visibility == published. When the database has
nothing to show (or the read fails) the bundled sample content is rendered
instead; readers never see an error for a failed read.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from gitaworld.db.session import get_db
from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Visibility
from gitaworld.models.language import Language
from gitaworld.models.verse import Verse
from gitaworld.progress import (
    TOTAL_CHAPTERS,
    TOTAL_VERSES,
    derived_counts,
    language_progress,
    resolve_count,
    LanguageProgress,
)
from gitaworld.sample_content import (
    SAMPLE_CHAPTERS,
    SAMPLE_LANGUAGES,
    sample_chapter,
    sample_verses,
)
from gitaworld.utils.share import share_text, verse_path, verse_url, whatsapp_link

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _templates(request: Request):
    """Use the shared Jinja instance + helpers registered in main.py."""
    return request.app.state.templates


# ---------- Public query helpers ----------
def published_chapters(db: Session) -> List[Chapter]:
    return (
        db.query(Chapter)
        .filter(Chapter.visibility == Visibility.PUBLISHED)
        .order_by(asc(Chapter.sort_order), asc(Chapter.chapter_number))
        .all()
    )


def published_chapter(db: Session, chapter_number: int) -> Optional[Chapter]:
    return (
        db.query(Chapter)
        .filter(
            Chapter.chapter_number == chapter_number,
            Chapter.visibility == Visibility.PUBLISHED,
        )
        .first()
    )


def published_verses(db: Session, chapter: Chapter) -> List[Verse]:
    return (
        db.query(Verse)
        .join(Language, Verse.language_id == Language.id)
        .options(joinedload(Verse.language))
        .filter(
            Verse.chapter_id == chapter.id,
            Verse.visibility == Visibility.PUBLISHED,
            Language.is_active.is_(True),
        )
        .order_by(asc(Verse.verse_number), asc(Language.name))
        .all()
    )


def daily_verse(db: Session) -> Optional[Verse]:
    return (
        db.query(Verse)
        .join(Chapter, Verse.chapter_id == Chapter.id)
        .join(Language, Verse.language_id == Language.id)
        .options(joinedload(Verse.chapter), joinedload(Verse.language))
        .filter(
            Verse.is_daily_verse.is_(True),
            Verse.visibility == Visibility.PUBLISHED,
            Chapter.visibility == Visibility.PUBLISHED,
            Language.is_active.is_(True),
        )
        .order_by(Verse.updated_at.desc(), Verse.id.desc())
        .first()
    )


def _verse_card(request: Request, chapter_number: int, verse, languages: List[str]) -> dict:
    text = share_text(chapter_number, verse.verse_number, getattr(verse, "whatsapp_share_text", None))
    url = verse_url(chapter_number, verse.verse_number, base_url=str(request.base_url))
    return {
        "verse": verse,
        "anchor": f"verse-{verse.verse_number}",
        "languages": languages,
        "share_path": verse_path(chapter_number, verse.verse_number),
        "share_text": text,
        "whatsapp_url": whatsapp_link(text, url),
    }
# ------------------------------------------


@router.get("/", response_class=HTMLResponse)
def home(request: Request, db: Session = Depends(get_db)):
    verse = None
    chapters = []
    try:
        verse = daily_verse(db)
        chapters = published_chapters(db)
    except SQLAlchemyError:
        logger.warning("Home page read failed; showing sample content", exc_info=True)

    if not chapters:
        chapters = SAMPLE_CHAPTERS

    card = None
    if verse is not None:
        card = _verse_card(request, verse.chapter.chapter_number, verse, [verse.language.name])
        card["chapter"] = verse.chapter

    return _templates(request).TemplateResponse(
        request,
        "index.html",
        {"title": "Bhagavad Gita World", "daily": card, "chapters": chapters[:6]},
    )


@router.get("/chapters", response_class=HTMLResponse)
def list_chapters(request: Request, db: Session = Depends(get_db)):
    chapters = []
    try:
        chapters = published_chapters(db)
    except SQLAlchemyError:
        logger.warning("Chapter list read failed; showing sample chapters", exc_info=True)

    fallback = not chapters
    if fallback:
        chapters = SAMPLE_CHAPTERS

    return _templates(request).TemplateResponse(
        request,
        "pages/chapters.html",
        {"title": "Chapters", "chapters": chapters, "fallback": fallback},
    )


@router.get("/chapter/{chapter_number}", response_class=HTMLResponse)
def show_chapter(
    chapter_number: int,
    request: Request,
    lang: Optional[str] = None,
    db: Session = Depends(get_db),
):
    chapter = None
    cards = []
    languages = []
    has_content = False
    try:
        chapter = published_chapter(db, chapter_number)
        has_content = chapter is not None or bool(published_chapters(db))
        if chapter is not None:
            all_verses = published_verses(db, chapter)
            # language picker only offers languages that have something to read
            seen = {}
            for v in all_verses:
                seen.setdefault(v.language.code, v.language)
            languages = sorted(seen.values(), key=lambda l: l.name)
            shown = [v for v in all_verses if not lang or v.language.code == lang.lower()]
            cards = [_verse_card(request, chapter_number, v, [v.language.name]) for v in shown]
    except SQLAlchemyError:
        logger.warning("Chapter %s read failed; falling back to sample", chapter_number, exc_info=True)
        chapter = None
        has_content = False

    if chapter is None and has_content:
        # hidden or draft chapter on a site that has real content
        raise HTTPException(status_code=404, detail="Chapter not found")

    fallback = chapter is None
    if fallback:
        chapter = sample_chapter(chapter_number)
        if chapter is None:
            raise HTTPException(status_code=404, detail="Chapter not found")
        cards = [_verse_card(request, chapter_number, v, v.languages) for v in sample_verses(chapter_number)]

    return _templates(request).TemplateResponse(
        request,
        "pages/chapter_detail.html",
        {
            "title": chapter.title,
            "chapter": chapter,
            "cards": cards,
            "languages": languages,
            "selected_lang": (lang or "").lower(),
            "fallback": fallback,
            "prev_number": chapter_number - 1 if chapter_number > 1 else None,
            "next_number": chapter_number + 1 if chapter_number < TOTAL_CHAPTERS else None,
            "total_chapters": TOTAL_CHAPTERS,
        },
    )


@router.get("/languages", response_class=HTMLResponse)
def list_languages(request: Request, db: Session = Depends(get_db)):
    rows = []
    try:
        languages = (
            db.query(Language)
            .filter(Language.is_active.is_(True))
            .order_by(asc(Language.name))
            .all()
        )
        counts = derived_counts(db) if languages else {}
        rows = [(lang, language_progress(lang, counts.get(lang.id, (0, 0)))) for lang in languages]
    except SQLAlchemyError:
        logger.warning("Language list read failed; showing sample languages", exc_info=True)

    fallback = not rows
    if fallback:
        rows = [
            (lang, LanguageProgress(
                verse_count=resolve_count(None, lang.verse_count),
                chapter_count=0,
                derived_verse_count=lang.verse_count,
                derived_chapter_count=0,
            ))
            for lang in SAMPLE_LANGUAGES
        ]

    return _templates(request).TemplateResponse(
        request,
        "pages/languages.html",
        {
            "title": "Languages",
            "rows": rows,
            "fallback": fallback,
            "total_verses": TOTAL_VERSES,
            "total_chapters": TOTAL_CHAPTERS,
        },
    )


# ---------- Static pages ----------
@router.get("/about", response_class=HTMLResponse)
def about(request: Request):
    return _templates(request).TemplateResponse(request, "pages/about.html", {"title": "About"})


@router.get("/donation", response_class=HTMLResponse)
def donation(request: Request):
    return _templates(request).TemplateResponse(request, "pages/donation.html", {"title": "Support Us"})


@router.get("/contact", response_class=HTMLResponse)
def contact(request: Request):
    return _templates(request).TemplateResponse(request, "pages/contact.html", {"title": "Contact"})
