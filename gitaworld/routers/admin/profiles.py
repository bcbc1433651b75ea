# gitaworld/routers/admin/profiles.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from gitaworld.db.session import get_db
from gitaworld.models.profile import Profile
from gitaworld.routers.admin.common import back_to, commit_or_error, not_found
from gitaworld.schemas import RoleCommand, validation_message
from gitaworld.utils.authz import AuthContext, require_admin
from gitaworld.utils.flash import flash

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/profiles/{profile_id}/role")
def profile_set_role(
    profile_id: int,
    request: Request,
    role: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_admin),
):
    profile = db.get(Profile, profile_id)
    if not profile:
        return not_found(request)

    try:
        cmd = RoleCommand.model_validate({"role": role})
    except ValidationError as e:
        flash(request, validation_message(e), "error")
        return back_to("profiles")

    previous = profile.role
    profile.role = cmd.role
    error = commit_or_error(db, f"set role of {profile_id}")
    if error:
        flash(request, error, "error")
        return back_to("profiles")

    # A self-demotion needs no refresh here: AuthContextMiddleware re-reads the
    # role on the redirect that follows.
    logger.info("User %s changed role of %s: %s -> %s", ctx.user_id, profile_id, previous.value, cmd.role.value)
    flash(request, f"User role updated to {cmd.role.value}")
    return back_to("profiles")
