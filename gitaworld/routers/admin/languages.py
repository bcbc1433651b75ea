# gitaworld/routers/admin/languages.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from gitaworld.db.session import get_db
from gitaworld.models.language import Language
from gitaworld.models.verse import Verse
from gitaworld.progress import TOTAL_CHAPTERS, TOTAL_VERSES
from gitaworld.routers.admin.common import (
    back_to,
    commit_or_error,
    is_confirmed,
    not_found,
    tpl,
)
from gitaworld.schemas import LanguageCommand, validation_message
from gitaworld.utils.authz import AuthContext, require_admin, require_editor
from gitaworld.utils.flash import flash

logger = logging.getLogger(__name__)

router = APIRouter()


def language_form(
    name: Optional[str] = Form(None),
    code: Optional[str] = Form(None),
    native_name: Optional[str] = Form(None),
    is_active: Optional[str] = Form(None),
    manual_verse_count: Optional[str] = Form(None),
    manual_chapter_count: Optional[str] = Form(None),
) -> dict:
    return {
        "name": name,
        "code": code,
        "native_name": native_name,
        "is_active": is_active,
        "manual_verse_count": manual_verse_count,
        "manual_chapter_count": manual_chapter_count,
    }


def _live_counts(db: Session, language_id: int):
    verses, chapters = (
        db.query(func.count(Verse.id), func.count(distinct(Verse.chapter_id)))
        .filter(Verse.language_id == language_id)
        .one()
    )
    return verses, chapters


def _form_from(db: Session, lang: Language) -> dict:
    # Blank manual counters are seeded with the live counts
    verses, chapters = _live_counts(db, lang.id)
    return {
        "name": lang.name,
        "code": lang.code,
        "native_name": lang.native_name or "",
        "is_active": "on" if lang.is_active else "",
        "manual_verse_count": lang.manual_verse_count or verses,
        "manual_chapter_count": lang.manual_chapter_count or chapters,
    }


def _render_form(request: Request, *, language: Optional[Language], form: dict, error: Optional[str] = None, status_code: int = 200):
    return tpl(request).TemplateResponse(
        request,
        "admin/language_form.html",
        {
            "mode": "edit" if language else "new",
            "language": language,
            "form": form,
            "error": error,
            "total_verses": TOTAL_VERSES,
            "total_chapters": TOTAL_CHAPTERS,
            "title": f"Edit · {language.name}" if language else "Add Language",
        },
        status_code=status_code,
    )


def _code_taken(db: Session, code: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Language.id).filter(Language.code == code)
    if exclude_id is not None:
        q = q.filter(Language.id != exclude_id)
    return q.first() is not None


# --------------- Create -------------------
@router.get("/languages/new")
def language_new(request: Request, ctx: AuthContext = Depends(require_editor)):
    return _render_form(request, language=None, form={"is_active": "on"})


@router.post("/languages")
def language_create(
    request: Request,
    form: dict = Depends(language_form),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    try:
        cmd = LanguageCommand.model_validate(form)
    except ValidationError as e:
        return _render_form(request, language=None, form=form, error=validation_message(e), status_code=400)

    if _code_taken(db, cmd.code):
        return _render_form(request, language=None, form=form, error=f"Language code '{cmd.code}' already exists.", status_code=400)

    lang = Language(**cmd.model_dump())
    db.add(lang)
    error = commit_or_error(db, f"create language {cmd.code}")
    if error:
        return _render_form(request, language=None, form=form, error=error, status_code=400)

    flash(request, "Language created successfully")
    return back_to("languages")
# -----------------------------------------


# --------------- Edit / Update ------------
@router.get("/languages/{language_id}/edit")
def language_edit(
    language_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    lang = db.get(Language, language_id)
    if not lang:
        return not_found(request)
    return _render_form(request, language=lang, form=_form_from(db, lang))


@router.post("/languages/{language_id}")
def language_update(
    language_id: int,
    request: Request,
    form: dict = Depends(language_form),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    lang = db.get(Language, language_id)
    if not lang:
        return not_found(request)

    try:
        cmd = LanguageCommand.model_validate(form)
    except ValidationError as e:
        return _render_form(request, language=lang, form=form, error=validation_message(e), status_code=400)

    if _code_taken(db, cmd.code, exclude_id=lang.id):
        return _render_form(request, language=lang, form=form, error=f"Language code '{cmd.code}' already exists.", status_code=400)

    # The saved counters are authoritative from here on; nothing recomputes them
    for key, val in cmd.model_dump().items():
        setattr(lang, key, val)

    error = commit_or_error(db, f"update language {language_id}")
    if error:
        return _render_form(request, language=lang, form=form, error=error, status_code=400)

    flash(request, "Language updated successfully")
    return back_to("languages")
# -----------------------------------------


# --------------- Toggle / Delete ----------
@router.post("/languages/{language_id}/toggle")
def language_toggle(
    language_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    lang = db.get(Language, language_id)
    if not lang:
        return not_found(request)

    lang.is_active = not lang.is_active
    now_active = lang.is_active
    error = commit_or_error(db, f"toggle language {language_id}")
    if error:
        flash(request, error, "error")
    else:
        flash(request, f"Language {'activated' if now_active else 'deactivated'}")
    return back_to("languages")


@router.get("/languages/{language_id}/delete")
def language_delete_confirm(
    language_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    lang = db.get(Language, language_id)
    if not lang:
        return not_found(request)
    verse_count, _ = _live_counts(db, lang.id)
    return tpl(request).TemplateResponse(
        request,
        "admin/confirm_delete.html",
        {
            "title": "Delete language",
            "label": f"{lang.name} ({lang.code})",
            "warning": (
                "Are you sure you want to delete this language? "
                f"This will also delete all {verse_count} associated verse(s)."
            ),
            "action": f"/admin/languages/{lang.id}/delete",
            "cancel": "/admin?tab=languages",
        },
    )


@router.post("/languages/{language_id}/delete")
def language_delete(
    language_id: int,
    request: Request,
    confirm: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    lang = db.get(Language, language_id)
    if not lang:
        return not_found(request)
    if not is_confirmed(confirm):
        flash(request, "Deletion cancelled.", "info")
        return back_to("languages")

    code = lang.code
    verse_count, _ = _live_counts(db, lang.id)
    # ORM cascade removes the verses in the same transaction
    db.delete(lang)
    error = commit_or_error(db, f"delete language {language_id}")
    if error:
        flash(request, error, "error")
    else:
        logger.info("User %s deleted language %s and %s verse(s)", ctx.user_id, code, verse_count)
        flash(request, "Language deleted successfully")
    return back_to("languages")
# -----------------------------------------
