# gitaworld/main.py
import os
import hashlib
import logging
from datetime import datetime

import markdown2
from dotenv import load_dotenv
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.sessions import SessionMiddleware

# ---- Load env (.env) ----
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---- DB + auth ----
from gitaworld.db.session import SessionLocal
from gitaworld.utils.authz import load_context
from gitaworld.utils.flash import pop_flashed
from gitaworld.utils.storage import video_url

# ---- Routers ----
from gitaworld.routers import pages as pages_router
from gitaworld.routers import auth as auth_router
from gitaworld.routers.admin import router as admin_router

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
STATIC_DIR = os.path.join(BASE_DIR, "static")
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")

app = FastAPI(title="Bhagavad Gita World")

# =============================================================================
# Middleware
# =============================================================================

class AuthContextMiddleware(BaseHTTPMiddleware):
    """
    Attaches request.state.auth = AuthContext (or None) from the session's
    'user_id'. The role is read fresh from the profiles table every request.
    MUST run *after* SessionMiddleware, so it is added *before* it
    (making it the inner middleware).
    """
    async def dispatch(self, request: Request, call_next):
        request.state.auth = None
        uid = None
        try:
            # Will raise AssertionError if SessionMiddleware hasn't run.
            uid = request.session.get("user_id")
        except AssertionError:
            uid = None

        if uid:
            try:
                with SessionLocal() as db:
                    request.state.auth = load_context(db, uid)
            except SQLAlchemyError:
                logger.warning("Could not load session context for user %s", uid, exc_info=True)
                request.state.auth = None
            if request.state.auth is None:
                # Stale cookie for a deleted account
                request.session.pop("user_id", None)

        return await call_next(request)

# Order matters:
# 1) Add AuthContext first (inner)
app.add_middleware(AuthContextMiddleware)
# 2) Then sessions (outer of auth context)
app.add_middleware(SessionMiddleware, secret_key=os.getenv("SECRET_KEY", "dev-secret-change-me"))
# 3) Then gzip etc.
app.add_middleware(GZipMiddleware, minimum_size=500)

# =============================================================================
# Static & Templates
# =============================================================================
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
templates = Jinja2Templates(directory=TEMPLATES_DIR)
app.state.templates = templates

# ---- Jinja helpers ----
# Stored video keys resolve against the object store, not /static
templates.env.globals["video_url"] = video_url

def md_filter(text: str) -> str:
    """Markdown → safe HTML (basic extras)."""
    if not text:
        return ""
    return markdown2.markdown(text, safe_mode="escape", extras=["fenced-code-blocks", "tables", "strike", "smarty"])

templates.env.filters["md"] = md_filter

templates.env.globals["now"] = lambda: datetime.now()
templates.env.globals["flashed"] = pop_flashed
templates.env.globals["auth_of"] = lambda request: getattr(request.state, "auth", None)

# ---- CSS cache-busting (no client JS) ----
def _static_file_version(path: str) -> str:
    try:
        with open(path, "rb") as f:
            return hashlib.sha1(f.read()).hexdigest()[:10]
    except OSError:
        return "dev"

STATIC_VERSION = _static_file_version(os.path.join(STATIC_DIR, "css", "site.css"))
templates.env.globals["STATIC_VERSION"] = STATIC_VERSION

# =============================================================================
# Error pages
# =============================================================================
def _accepts_html(request: Request) -> bool:
    return "text/html" in (request.headers.get("accept") or "")


@app.exception_handler(403)
async def handle_forbidden(request: Request, exc: HTTPException):
    """Signed in but lacking the role: explicit panel instead of a redirect."""
    if _accepts_html(request):
        return templates.TemplateResponse(
            request,
            "pages/access_denied.html",
            {"title": "Access Denied", "detail": getattr(exc, "detail", None)},
            status_code=403,
        )
    return JSONResponse({"detail": "Access Denied"}, status_code=403)


@app.exception_handler(404)
async def handle_not_found(request: Request, exc: HTTPException):
    if _accepts_html(request) or request.method == "GET":
        return templates.TemplateResponse(
            request, "pages/not_found.html", {"title": "Not found"}, status_code=404
        )
    return JSONResponse({"detail": "Not Found"}, status_code=404)

# =============================================================================
# Routes
# =============================================================================
app.include_router(pages_router.router)     # public site
app.include_router(auth_router.router)      # /auth
app.include_router(admin_router)            # /admin
