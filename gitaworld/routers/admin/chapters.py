# gitaworld/routers/admin/chapters.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from gitaworld.db.session import get_db
from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Visibility
from gitaworld.models.verse import Verse
from gitaworld.routers.admin.common import (
    back_to,
    commit_or_error,
    is_confirmed,
    not_found,
    tpl,
)
from gitaworld.schemas import ChapterCommand, validation_message
from gitaworld.utils.authz import AuthContext, require_admin, require_editor
from gitaworld.utils.flash import flash

logger = logging.getLogger(__name__)

router = APIRouter()


def chapter_form(
    chapter_number: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    sanskrit_title: Optional[str] = Form(None),
    english_title: Optional[str] = Form(None),
    total_verses: Optional[str] = Form(None),
    summary: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    visibility: Optional[str] = Form(None),
    sort_order: Optional[str] = Form(None),
) -> dict:
    return {
        "chapter_number": chapter_number,
        "title": title,
        "sanskrit_title": sanskrit_title,
        "english_title": english_title,
        "total_verses": total_verses,
        "summary": summary,
        "description": description,
        "visibility": visibility,
        "sort_order": sort_order,
    }


def _form_from(ch: Chapter) -> dict:
    return {
        "chapter_number": ch.chapter_number,
        "title": ch.title,
        "sanskrit_title": ch.sanskrit_title or "",
        "english_title": ch.english_title or "",
        "total_verses": ch.total_verses if ch.total_verses is not None else "",
        "summary": ch.summary or "",
        "description": ch.description or "",
        "visibility": ch.visibility.value,
        "sort_order": ch.sort_order if ch.sort_order is not None else 0,
    }


def _render_form(request: Request, *, chapter: Optional[Chapter], form: dict, error: Optional[str] = None, status_code: int = 200):
    return tpl(request).TemplateResponse(
        request,
        "admin/chapter_form.html",
        {
            "mode": "edit" if chapter else "new",
            "chapter": chapter,
            "form": form,
            "error": error,
            "visibilities": list(Visibility),
            "title": f"Edit · Chapter {chapter.chapter_number}" if chapter else "New Chapter",
        },
        status_code=status_code,
    )


def _number_taken(db: Session, number: int, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Chapter.id).filter(Chapter.chapter_number == number)
    if exclude_id is not None:
        q = q.filter(Chapter.id != exclude_id)
    return q.first() is not None


# --------------- Create -------------------
@router.get("/chapter")
def chapter_new(request: Request, ctx: AuthContext = Depends(require_editor)):
    form = {"chapter_number": 1, "visibility": Visibility.DRAFT.value, "sort_order": 0}
    return _render_form(request, chapter=None, form=form)


@router.post("/chapter")
def chapter_create(
    request: Request,
    form: dict = Depends(chapter_form),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    try:
        cmd = ChapterCommand.model_validate(form)
    except ValidationError as e:
        return _render_form(request, chapter=None, form=form, error=validation_message(e), status_code=400)

    if _number_taken(db, cmd.chapter_number):
        return _render_form(
            request, chapter=None, form=form,
            error=f"Chapter {cmd.chapter_number} already exists.", status_code=400,
        )

    ch = Chapter(**cmd.model_dump())
    db.add(ch)
    error = commit_or_error(db, f"create chapter {cmd.chapter_number}")
    if error:
        return _render_form(request, chapter=None, form=form, error=error, status_code=400)

    logger.info("User %s created chapter %s", ctx.user_id, ch.chapter_number)
    flash(request, "Chapter created successfully")
    return back_to("chapters")
# -----------------------------------------


# --------------- Edit / Update ------------
@router.get("/chapter/{chapter_id}")
def chapter_edit(
    chapter_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    ch = db.get(Chapter, chapter_id)
    if not ch:
        return not_found(request)
    return _render_form(request, chapter=ch, form=_form_from(ch))


@router.post("/chapter/{chapter_id}")
def chapter_update(
    chapter_id: int,
    request: Request,
    form: dict = Depends(chapter_form),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    ch = db.get(Chapter, chapter_id)
    if not ch:
        return not_found(request)

    try:
        cmd = ChapterCommand.model_validate(form)
    except ValidationError as e:
        return _render_form(request, chapter=ch, form=form, error=validation_message(e), status_code=400)

    if _number_taken(db, cmd.chapter_number, exclude_id=ch.id):
        return _render_form(
            request, chapter=ch, form=form,
            error=f"Chapter {cmd.chapter_number} already exists.", status_code=400,
        )

    for key, val in cmd.model_dump().items():
        setattr(ch, key, val)

    error = commit_or_error(db, f"update chapter {chapter_id}")
    if error:
        return _render_form(request, chapter=ch, form=form, error=error, status_code=400)

    flash(request, "Chapter updated successfully")
    return back_to("chapters")
# -----------------------------------------


# --------------- Toggle / Delete ----------
@router.post("/chapters/{chapter_id}/toggle")
def chapter_toggle(
    chapter_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    ch = db.get(Chapter, chapter_id)
    if not ch:
        return not_found(request)

    try:
        new_visibility = ch.toggle_visibility()
    except ValueError as e:
        flash(request, str(e), "error")
        return back_to("chapters")

    error = commit_or_error(db, f"toggle chapter {chapter_id}")
    if error:
        flash(request, error, "error")
    else:
        flash(request, f"Chapter {new_visibility.value}")
    return back_to("chapters")


@router.get("/chapters/{chapter_id}/delete")
def chapter_delete_confirm(
    chapter_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    ch = db.get(Chapter, chapter_id)
    if not ch:
        return not_found(request)
    verse_count = db.query(Verse.id).filter(Verse.chapter_id == ch.id).count()
    return tpl(request).TemplateResponse(
        request,
        "admin/confirm_delete.html",
        {
            "title": "Delete chapter",
            "label": f"Chapter {ch.chapter_number}: {ch.title}",
            "warning": f"This will also delete its {verse_count} verse(s)." if verse_count else None,
            "action": f"/admin/chapters/{ch.id}/delete",
            "cancel": "/admin?tab=chapters",
        },
    )


@router.post("/chapters/{chapter_id}/delete")
def chapter_delete(
    chapter_id: int,
    request: Request,
    confirm: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    ch = db.get(Chapter, chapter_id)
    if not ch:
        return not_found(request)
    if not is_confirmed(confirm):
        flash(request, "Deletion cancelled.", "info")
        return back_to("chapters")

    number = ch.chapter_number
    db.delete(ch)
    error = commit_or_error(db, f"delete chapter {chapter_id}")
    if error:
        flash(request, error, "error")
    else:
        logger.info("User %s deleted chapter %s", ctx.user_id, number)
        flash(request, "Chapter deleted successfully")
    return back_to("chapters")
# -----------------------------------------
