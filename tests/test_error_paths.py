import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Visibility
from gitaworld.models.language import Language
from gitaworld.routers import pages
from gitaworld.routers.admin import common, dashboard


def _read_fails(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("no such table: chapters"))


def _commit_fails(self):
    raise OperationalError("UPDATE", {}, Exception("database is locked"))


# ---------- read failures ----------
def test_chapter_list_falls_back_to_samples(client, make_chapter, monkeypatch):
    make_chapter(1, title="Stored Chapter")
    monkeypatch.setattr(pages, "published_chapters", _read_fails)

    res = client.get("/chapters")
    assert res.status_code == 200
    assert "Arjuna Vishada Yoga" in res.text
    assert "Stored Chapter" not in res.text


def test_chapter_detail_falls_back_to_samples(client, make_chapter, monkeypatch):
    make_chapter(1, title="Stored Chapter")
    monkeypatch.setattr(pages, "published_chapter", _read_fails)

    res = client.get("/chapter/1")
    assert res.status_code == 200
    assert "Dhritarashtra said" in res.text


def test_language_list_falls_back_to_samples(client, make_language, monkeypatch):
    make_language("xx", "Stored Language")
    monkeypatch.setattr(pages, "derived_counts", _read_fails)

    res = client.get("/languages")
    assert res.status_code == 200
    assert "Sanskrit" in res.text
    assert "Stored Language" not in res.text


def test_home_survives_read_failure(client, monkeypatch):
    monkeypatch.setattr(pages, "daily_verse", _read_fails)
    res = client.get("/")
    assert res.status_code == 200
    assert "Arjuna Vishada Yoga" in res.text


def test_admin_list_shows_empty_state_and_error(editor_client, make_chapter, monkeypatch):
    make_chapter(1, title="Stored Chapter")
    monkeypatch.setattr(dashboard, "list_chapters", _read_fails)

    res = editor_client.get("/admin?tab=chapters")
    assert res.status_code == 200
    assert "Failed to load chapters" in res.text
    assert "No chapters found." in res.text
    assert "Stored Chapter" not in res.text


# ---------- write failures ----------
def test_failed_toggle_rolls_back_and_flashes(editor_client, make_chapter, db, monkeypatch):
    ch = make_chapter(1, visibility=Visibility.PUBLISHED)
    monkeypatch.setattr(Session, "commit", _commit_fails)

    res = editor_client.post(f"/admin/chapters/{ch.id}/toggle")
    assert res.status_code == 200
    assert "database is locked" in res.text
    db.expire_all()
    assert db.get(Chapter, ch.id).visibility == Visibility.PUBLISHED


def test_failed_update_rerenders_form(editor_client, make_language, db, monkeypatch):
    lang = make_language("hi", "Hindi")
    monkeypatch.setattr(Session, "commit", _commit_fails)

    res = editor_client.post(
        f"/admin/languages/{lang.id}",
        data={"name": "Hindi (renamed)", "code": "hi", "is_active": "on", "manual_verse_count": "150"},
    )
    assert res.status_code == 400
    assert "database is locked" in res.text
    db.expire_all()
    saved = db.get(Language, lang.id)
    assert saved.name == "Hindi"
    assert saved.manual_verse_count is None


def test_failed_delete_keeps_row(admin_client, make_chapter, db, monkeypatch):
    ch = make_chapter(1)
    monkeypatch.setattr(Session, "commit", _commit_fails)

    res = admin_client.post(f"/admin/chapters/{ch.id}/delete", data={"confirm": "yes"})
    assert "database is locked" in res.text
    assert "Chapter deleted successfully" not in res.text
    db.expire_all()
    assert db.get(Chapter, ch.id) is not None


@pytest.mark.parametrize(
    "exc, expected",
    [
        (OperationalError("UPDATE", {}, Exception("disk full")), "disk full"),
        (IntegrityError("INSERT", {}, Exception("")), "That change conflicts with existing data."),
        (SQLAlchemyError(), common.GENERIC_WRITE_ERROR),
    ],
)
def test_backend_message(exc, expected):
    assert common.backend_message(exc) == expected
