# gitaworld/routers/admin/uploads.py
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from gitaworld.utils.authz import AuthContext, require_editor
from gitaworld.utils.storage import presign_put, video_key

router = APIRouter()


@router.post("/uploads/presign")
def presign_upload(payload: dict = Body(...), ctx: AuthContext = Depends(require_editor)):
    """
    Body: either {"key": "videos/hi/ch01/v001.mp4", "content_type": "video/mp4"}
    or {"chapter_number": 1, "language_code": "hi", "verse_number": 1,
        "filename": "clip.mp4", "content_type": "video/mp4"}
    Returns: {"key", "upload_url", "public_url"}. Store the key (or public_url) in
    video_file_path; templates resolve keys with storage.video_url.
    """
    payload = payload or {}
    ctype = payload.get("content_type") or "application/octet-stream"
    key = (payload.get("key") or "").strip()
    if not key:
        try:
            key = video_key(
                int(payload.get("chapter_number")),
                str(payload.get("language_code") or ""),
                int(payload.get("verse_number")),
                str(payload.get("filename") or ""),
            )
        except (TypeError, ValueError):
            return JSONResponse(
                {"error": "Provide 'key' or chapter_number, language_code and verse_number"},
                status_code=400,
            )
    try:
        return JSONResponse(presign_put(key, ctype))
    except RuntimeError as e:  # includes StorageNotConfigured
        return JSONResponse({"error": str(e)}, status_code=500)
