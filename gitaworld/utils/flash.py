# gitaworld/utils/flash.py
"""One-shot notifications carried in the session until the next render."""
from typing import Dict, List

from fastapi import Request

_KEY = "_flash"


def flash(request: Request, message: str, kind: str = "success") -> None:
    messages = list(request.session.get(_KEY, []))
    messages.append({"kind": kind, "message": message})
    request.session[_KEY] = messages


def pop_flashed(request: Request) -> List[Dict[str, str]]:
    try:
        return request.session.pop(_KEY, [])
    except AssertionError:
        # SessionMiddleware not installed (e.g. error pages before routing)
        return []
