# gitaworld/routers/admin/common.py
import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

GENERIC_WRITE_ERROR = "Something went wrong while saving. Please try again."


def tpl(request: Request):
    # Use the shared Jinja2Templates configured in main.py
    return request.app.state.templates


def to_int_or_none(v: Optional[str]) -> Optional[int]:
    if v is None or str(v).strip() == "":
        return None
    try:
        return int(v)
    except ValueError:
        return None


def is_confirmed(v: Optional[str]) -> bool:
    return (v or "").strip().lower() in ("yes", "true", "on", "1")


def backend_message(exc: SQLAlchemyError, fallback: str = GENERIC_WRITE_ERROR) -> str:
    """The database's own message when there is one, else a generic line."""
    orig = getattr(exc, "orig", None)
    text = str(orig).strip() if orig is not None else ""
    if isinstance(exc, IntegrityError) and not text:
        return "That change conflicts with existing data."
    return text or fallback


def commit_or_error(db: Session, what: str) -> Optional[str]:
    """
    Commit the pending write. On failure roll back (prior state untouched)
    and return a user-facing message; no retry.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Write failed: %s", what)
        return backend_message(e)
    return None


def back_to(tab: str) -> RedirectResponse:
    # Lists are always re-queried after a write
    return RedirectResponse(url=f"/admin?tab={tab}", status_code=303)


def not_found(request: Request):
    return tpl(request).TemplateResponse(
        request, "pages/not_found.html", {"title": "Not found"}, status_code=404
    )
