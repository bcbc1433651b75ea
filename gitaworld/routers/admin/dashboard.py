# gitaworld/routers/admin/dashboard.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlalchemy import asc, desc, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from gitaworld.db.session import get_db
from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Role
from gitaworld.models.language import Language
from gitaworld.models.profile import Profile
from gitaworld.models.user import User
from gitaworld.models.verse import Verse
from gitaworld.progress import TOTAL_CHAPTERS, TOTAL_VERSES, derived_counts, language_progress
from gitaworld.routers.admin.common import to_int_or_none, tpl
from gitaworld.utils.authz import AuthContext, require_editor
from gitaworld.utils.flash import flash

logger = logging.getLogger(__name__)

router = APIRouter()

TABS = ("chapters", "verses", "languages", "profiles")


# ---------------- List queries ----------------
def list_chapters(db: Session):
    return (
        db.query(Chapter)
        .order_by(asc(Chapter.sort_order), asc(Chapter.chapter_number))
        .all()
    )


def list_verses(
    db: Session,
    search: Optional[str] = None,
    chapter_id: Optional[int] = None,
    language_id: Optional[int] = None,
):
    q = db.query(Verse).options(joinedload(Verse.chapter), joinedload(Verse.language))
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        matches = [
            Verse.title.ilike(like),
            Verse.description.ilike(like),
            Verse.sanskrit_text.ilike(like),
            Verse.english_translation.ilike(like),
        ]
        if term.isdigit():
            matches.append(Verse.verse_number == int(term))
        q = q.filter(or_(*matches))
    if chapter_id:
        q = q.filter(Verse.chapter_id == chapter_id)
    if language_id:
        q = q.filter(Verse.language_id == language_id)
    return q.order_by(desc(Verse.created_at), desc(Verse.id)).all()


def list_languages(db: Session):
    languages = db.query(Language).order_by(asc(Language.name)).all()
    counts = derived_counts(db)
    return [(lang, language_progress(lang, counts.get(lang.id, (0, 0)))) for lang in languages]


def list_profiles(db: Session):
    return (
        db.query(Profile, User.email)
        .join(User, User.id == Profile.id)
        .order_by(desc(Profile.created_at), desc(Profile.id))
        .all()
    )
# ----------------------------------------------


@router.get("", response_class=HTMLResponse)
def dashboard(
    request: Request,
    tab: str = "chapters",
    q: Optional[str] = None,
    chapter: Optional[str] = None,
    language: Optional[str] = None,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_editor),
):
    if tab not in TABS:
        tab = "chapters"
    if tab == "profiles" and not ctx.is_admin:
        raise HTTPException(status_code=403, detail="Managing users requires the admin role.")

    data = {"rows": []}
    filters = {"q": q or "", "chapter": to_int_or_none(chapter), "language": to_int_or_none(language)}
    try:
        if tab == "chapters":
            data["rows"] = list_chapters(db)
        elif tab == "verses":
            data["rows"] = list_verses(db, q, filters["chapter"], filters["language"])
            data["chapters"] = list_chapters(db)
            data["languages"] = db.query(Language).order_by(asc(Language.name)).all()
        elif tab == "languages":
            data["rows"] = list_languages(db)
        elif tab == "profiles":
            data["rows"] = list_profiles(db)
            data["roles"] = list(Role)
    except SQLAlchemyError:
        logger.exception("Admin %s list failed", tab)
        flash(request, f"Failed to load {tab}", "error")
        data = {"rows": []}

    return tpl(request).TemplateResponse(
        request,
        "admin/dashboard.html",
        {
            "title": "Admin",
            "tab": tab,
            "tabs": [t for t in TABS if t != "profiles" or ctx.is_admin],
            "ctx": ctx,
            "filters": filters,
            "total_verses": TOTAL_VERSES,
            "total_chapters": TOTAL_CHAPTERS,
            **data,
        },
    )
