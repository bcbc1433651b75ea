# gitaworld/utils/authz.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from fastapi import HTTPException, Request
from sqlalchemy.orm import Session

from gitaworld.models.enums import ROLE_RANK, Role
from gitaworld.models.profile import Profile
from gitaworld.models.user import User

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/auth"


@dataclass(frozen=True)
class AuthContext:
    """
    Who is making the request and what they may do.

    Built from the database on every request by the session middleware, so a
    role change is visible on the very next request. Cleared at sign-out.
    """

    user_id: int
    email: str
    full_name: Optional[str]
    role: Role

    @property
    def can_edit(self) -> bool:
        return can_access(self.role, Role.EDITOR)

    @property
    def is_admin(self) -> bool:
        return can_access(self.role, Role.ADMIN)


def can_access(role: Optional[Role], required: Role) -> bool:
    """
    admin passes everything, editor passes editor/viewer checks,
    viewer passes viewer checks only. No role passes nothing.
    """
    if role is None:
        return False
    try:
        role = Role(role)
    except ValueError:
        return False
    return ROLE_RANK[role] >= ROLE_RANK[Role(required)]


def load_context(db: Session, user_id: int) -> Optional[AuthContext]:
    row = (
        db.query(User.id, User.email, Profile.full_name, Profile.role)
        .outerjoin(Profile, Profile.id == User.id)
        .filter(User.id == user_id)
        .first()
    )
    if not row:
        return None
    return AuthContext(
        user_id=row.id,
        email=row.email,
        full_name=row.full_name,
        # an account without a profile row is treated as a plain reader
        role=row.role or Role.VIEWER,
    )


def current_context(request: Request) -> Optional[AuthContext]:
    return getattr(request.state, "auth", None)


def sign_in(request: Request, ctx: AuthContext) -> None:
    request.session["user_id"] = ctx.user_id
    request.state.auth = ctx


def sign_out(request: Request) -> None:
    request.session.pop("user_id", None)
    request.state.auth = None


def _require(request: Request, required: Role) -> AuthContext:
    """
    - Not signed in: redirect to /auth?next=<current-path-and-query>
    - Signed in without the role: 403 (rendered as an Access Denied panel)
    - Otherwise: the caller's AuthContext
    """
    ctx = current_context(request)
    if ctx is None:
        next_path = request.url.path or "/"
        if request.url.query:
            next_path += f"?{request.url.query}"
        raise HTTPException(
            status_code=303,
            headers={"Location": f"{SIGN_IN_PATH}?next={quote(next_path)}"},
        )

    if not can_access(ctx.role, required):
        logger.info(
            "Denied %s %s to user %s (role=%s, needs %s)",
            request.method, request.url.path, ctx.user_id, ctx.role.value, required.value,
        )
        raise HTTPException(status_code=403, detail="Access Denied")
    return ctx


def require_editor(request: Request) -> AuthContext:
    return _require(request, Role.EDITOR)


def require_admin(request: Request) -> AuthContext:
    return _require(request, Role.ADMIN)
