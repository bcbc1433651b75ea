# gitaworld/routers/auth.py
from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from fastapi import APIRouter, Request, Depends, Form, Query
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gitaworld.db.session import get_db
from gitaworld.models.enums import Role
from gitaworld.models.profile import Profile
from gitaworld.models.user import User
from gitaworld.utils.authz import current_context, load_context, sign_in, sign_out
from gitaworld.utils.flash import flash
from gitaworld.utils.security import MIN_PASSWORD_LENGTH, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Registering with this address yields an admin profile (bootstrap for a fresh install)
ADMIN_EMAIL = (os.getenv("ADMIN_EMAIL") or "").strip().lower()


# ========= helpers =========
def _is_safe_next(next_url: str | None) -> bool:
    """
    Only allow local/relative redirects. Blocks absolute/externals.
    Accepts "" or None as safe (meaning: no redirect).
    """
    if not next_url:
        return True
    parts = urlparse(next_url)
    return (not parts.scheme and not parts.netloc and next_url.startswith("/") and not next_url.startswith("//"))


def _redirect_to_next(next_url: str | None, fallback: str = "/") -> RedirectResponse:
    url = fallback
    if next_url and _is_safe_next(next_url):
        url = next_url
    return RedirectResponse(url=url, status_code=303)


def _render(request: Request, status_code: int = 200, **ctx):
    base = {"title": "Sign In", "next": "", "mode": "login", "error": None, "email": "", "full_name": ""}
    base.update(ctx)
    return request.app.state.templates.TemplateResponse(request, "auth/auth.html", base, status_code=status_code)


# ========= sign-in page =========
@router.get("", response_class=HTMLResponse)
def auth_page(
    request: Request,
    next: str | None = Query(default=None),
    mode: str = Query(default="login"),
):
    """Sign in / create account. Already signed in: go where they intended."""
    if current_context(request) is not None:
        return _redirect_to_next(next)
    return _render(request, next=next or "", mode="register" if mode == "register" else "login")


@router.post("/login")
def login_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    next: str | None = Form(default=None),
    db: Session = Depends(get_db),
):
    email_norm = (email or "").strip().lower()
    if not email_norm or not password:
        return _render(request, 400, error="Email and password are required.", next=next or "", email=email_norm)

    user = db.query(User).filter(User.email == email_norm).first()
    if not user or not verify_password(password, user.password_hash):
        return _render(request, 400, error="Invalid credentials.", next=next or "", email=email_norm)

    sign_in(request, load_context(db, user.id))
    flash(request, "Signed in successfully.")
    return _redirect_to_next(next)


@router.post("/register")
def register_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    full_name: str = Form(""),
    next: str | None = Form(default=None),
    db: Session = Depends(get_db),
):
    email_norm = (email or "").strip().lower()
    full_name = (full_name or "").strip()
    form = {"mode": "register", "next": next or "", "email": email_norm, "full_name": full_name}

    if not email_norm or not password:
        return _render(request, 400, error="Email and password are required.", **form)

    if len(password) < MIN_PASSWORD_LENGTH:
        return _render(request, 400, error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", **form)

    if db.query(User).filter(User.email == email_norm).first():
        return _render(request, 400, error="Email already in use.", **form)

    role = Role.ADMIN if ADMIN_EMAIL and email_norm == ADMIN_EMAIL else Role.VIEWER
    user = User(email=email_norm, password_hash=hash_password(password))
    user.profile = Profile(full_name=full_name or None, role=role)
    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for %s", email_norm)
        return _render(request, 400, error="Could not create the account. Please try again.", **form)
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, role.value)

    sign_in(request, load_context(db, user.id))
    flash(request, "Account created.")
    return _redirect_to_next(next)


# ========= logout =========
@router.post("/logout")
def logout(request: Request):
    sign_out(request)
    request.session.clear()
    return RedirectResponse(url="/", status_code=303)
