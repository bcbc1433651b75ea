from fastapi import APIRouter

from gitaworld.routers.admin import chapters, dashboard, languages, profiles, uploads, verses

router = APIRouter(tags=["admin"])
for _module in (dashboard, chapters, verses, languages, profiles, uploads):
    router.include_router(_module.router, prefix="/admin")
