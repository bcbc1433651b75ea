# gitaworld/utils/share.py
import os
from typing import Optional
from urllib.parse import quote

SITE_NAME = "Bhagavad Gita World"
SITE_URL = (os.getenv("SITE_URL") or "").rstrip("/")

WHATSAPP_BASE = "https://wa.me/"


def verse_path(chapter_number: int, verse_number: int) -> str:
    return f"/chapter/{chapter_number}#verse-{verse_number}"


def verse_url(chapter_number: int, verse_number: int, base_url: str = "") -> str:
    # A configured SITE_URL wins over the request host
    base = (SITE_URL or base_url or "").rstrip("/")
    return f"{base}{verse_path(chapter_number, verse_number)}"


def share_text(chapter_number: int, verse_number: int, custom: Optional[str] = None) -> str:
    if custom and custom.strip():
        return custom.strip()
    return f"Check out Chapter {chapter_number}, Verse {verse_number} from {SITE_NAME}"


def whatsapp_link(text: str, url: str) -> str:
    """Deep link used when the browser has no native share sheet."""
    payload = f"{text}\n{url}"
    return f"{WHATSAPP_BASE}?text={quote(payload, safe='')}"
