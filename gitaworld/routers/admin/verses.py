# gitaworld/routers/admin/verses.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy import asc, or_
from sqlalchemy.orm import Session

from gitaworld.db.session import get_db
from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Visibility, VerseStatus
from gitaworld.models.language import Language
from gitaworld.models.verse import Verse
from gitaworld.routers.admin.common import (
    back_to,
    commit_or_error,
    is_confirmed,
    not_found,
    tpl,
)
from gitaworld.schemas import VerseCommand, validation_message
from gitaworld.utils.authz import AuthContext, require_admin, require_editor
from gitaworld.utils.flash import flash

logger = logging.getLogger(__name__)

router = APIRouter()


def verse_form(
    chapter_id: Optional[str] = Form(None),
    language_id: Optional[str] = Form(None),
    verse_number: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    sanskrit_text: Optional[str] = Form(None),
    transliteration: Optional[str] = Form(None),
    english_translation: Optional[str] = Form(None),
    commentary: Optional[str] = Form(None),
    youtube_url: Optional[str] = Form(None),
    video_file_path: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    visibility: Optional[str] = Form(None),
    is_daily_verse: Optional[str] = Form(None),
    whatsapp_share_text: Optional[str] = Form(None),
    keywords: Optional[str] = Form(None),
) -> dict:
    return {
        "chapter_id": chapter_id,
        "language_id": language_id,
        "verse_number": verse_number,
        "title": title,
        "description": description,
        "sanskrit_text": sanskrit_text,
        "transliteration": transliteration,
        "english_translation": english_translation,
        "commentary": commentary,
        "youtube_url": youtube_url,
        "video_file_path": video_file_path,
        "status": status,
        "visibility": visibility,
        "is_daily_verse": is_daily_verse,
        "whatsapp_share_text": whatsapp_share_text,
        "keywords": keywords,
    }


def _form_from(v: Verse) -> dict:
    return {
        "chapter_id": v.chapter_id,
        "language_id": v.language_id,
        "verse_number": v.verse_number,
        "title": v.title or "",
        "description": v.description or "",
        "sanskrit_text": v.sanskrit_text or "",
        "transliteration": v.transliteration or "",
        "english_translation": v.english_translation or "",
        "commentary": v.commentary or "",
        "youtube_url": v.youtube_url or "",
        "video_file_path": v.video_file_path or "",
        "status": v.status.value,
        "visibility": v.visibility.value,
        "is_daily_verse": "on" if v.is_daily_verse else "",
        "whatsapp_share_text": v.whatsapp_share_text or "",
        "keywords": v.keywords_text,
    }


def _choices(db: Session, verse: Optional[Verse] = None):
    chapters = db.query(Chapter).order_by(asc(Chapter.chapter_number)).all()
    lang_filter = Language.is_active.is_(True)
    if verse is not None:
        # keep the current language selectable even if it was deactivated
        lang_filter = or_(lang_filter, Language.id == verse.language_id)
    languages = db.query(Language).filter(lang_filter).order_by(asc(Language.name)).all()
    return chapters, languages


def _render_form(request: Request, db: Session, *, verse: Optional[Verse], form: dict, error: Optional[str] = None, status_code: int = 200):
    chapters, languages = _choices(db, verse)
    return tpl(request).TemplateResponse(
        request,
        "admin/verse_form.html",
        {
            "mode": "edit" if verse else "new",
            "verse": verse,
            "form": form,
            "error": error,
            "chapters": chapters,
            "languages": languages,
            "statuses": list(VerseStatus),
            "visibilities": list(Visibility),
            "title": f"Edit · Verse {verse.verse_number}" if verse else "New Verse",
        },
        status_code=status_code,
    )


def _check_references(db: Session, cmd: VerseCommand, exclude_id: Optional[int] = None) -> Optional[str]:
    if db.get(Chapter, cmd.chapter_id) is None:
        return "Selected chapter does not exist."
    if db.get(Language, cmd.language_id) is None:
        return "Selected language does not exist."
    q = db.query(Verse.id).filter(
        Verse.chapter_id == cmd.chapter_id,
        Verse.language_id == cmd.language_id,
        Verse.verse_number == cmd.verse_number,
    )
    if exclude_id is not None:
        q = q.filter(Verse.id != exclude_id)
    if q.first() is not None:
        return f"Verse {cmd.verse_number} already exists for this chapter and language."
    return None


# --------------- Create -------------------
@router.get("/verse")
def verse_new(
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    form = {
        "verse_number": 1,
        "status": VerseStatus.PENDING.value,
        "visibility": Visibility.DRAFT.value,
    }
    return _render_form(request, db, verse=None, form=form)


@router.post("/verse")
def verse_create(
    request: Request,
    form: dict = Depends(verse_form),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    try:
        cmd = VerseCommand.model_validate(form)
    except ValidationError as e:
        return _render_form(request, db, verse=None, form=form, error=validation_message(e), status_code=400)

    problem = _check_references(db, cmd)
    if problem:
        return _render_form(request, db, verse=None, form=form, error=problem, status_code=400)

    verse = Verse(**cmd.model_dump(), created_by=ctx.user_id)
    db.add(verse)
    error = commit_or_error(db, f"create verse {cmd.chapter_id}/{cmd.language_id}/{cmd.verse_number}")
    if error:
        return _render_form(request, db, verse=None, form=form, error=error, status_code=400)

    flash(request, "Verse created successfully")
    return back_to("verses")
# -----------------------------------------


# --------------- Edit / Update ------------
@router.get("/verse/{verse_id}")
def verse_edit(
    verse_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    verse = db.get(Verse, verse_id)
    if not verse:
        return not_found(request)
    return _render_form(request, db, verse=verse, form=_form_from(verse))


@router.post("/verse/{verse_id}")
def verse_update(
    verse_id: int,
    request: Request,
    form: dict = Depends(verse_form),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    verse = db.get(Verse, verse_id)
    if not verse:
        return not_found(request)

    try:
        cmd = VerseCommand.model_validate(form)
    except ValidationError as e:
        return _render_form(request, db, verse=verse, form=form, error=validation_message(e), status_code=400)

    problem = _check_references(db, cmd, exclude_id=verse.id)
    if problem:
        return _render_form(request, db, verse=verse, form=form, error=problem, status_code=400)

    for key, val in cmd.model_dump().items():
        setattr(verse, key, val)

    error = commit_or_error(db, f"update verse {verse_id}")
    if error:
        return _render_form(request, db, verse=verse, form=form, error=error, status_code=400)

    flash(request, "Verse updated successfully")
    return back_to("verses")
# -----------------------------------------


# --------------- Toggle / Delete ----------
@router.post("/verses/{verse_id}/toggle")
def verse_toggle(
    verse_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    verse = db.get(Verse, verse_id)
    if not verse:
        return not_found(request)

    try:
        new_visibility = verse.toggle_visibility()
    except ValueError as e:
        flash(request, str(e), "error")
        return back_to("verses")

    error = commit_or_error(db, f"toggle verse {verse_id}")
    if error:
        flash(request, error, "error")
    else:
        flash(request, f"Verse {new_visibility.value}")
    return back_to("verses")


@router.get("/verses/{verse_id}/delete")
def verse_delete_confirm(
    verse_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    verse = db.get(Verse, verse_id)
    if not verse:
        return not_found(request)
    return tpl(request).TemplateResponse(
        request,
        "admin/confirm_delete.html",
        {
            "title": "Delete verse",
            "label": (
                f"Chapter {verse.chapter.chapter_number}, verse {verse.verse_number} "
                f"({verse.language.name})"
            ),
            "warning": None,
            "action": f"/admin/verses/{verse.id}/delete",
            "cancel": "/admin?tab=verses",
        },
    )


@router.post("/verses/{verse_id}/delete")
def verse_delete(
    verse_id: int,
    request: Request,
    confirm: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    verse = db.get(Verse, verse_id)
    if not verse:
        return not_found(request)
    if not is_confirmed(confirm):
        flash(request, "Deletion cancelled.", "info")
        return back_to("verses")

    db.delete(verse)
    error = commit_or_error(db, f"delete verse {verse_id}")
    if error:
        flash(request, error, "error")
    else:
        logger.info("User %s deleted verse %s", ctx.user_id, verse_id)
        flash(request, "Verse deleted successfully")
    return back_to("verses")
# -----------------------------------------
