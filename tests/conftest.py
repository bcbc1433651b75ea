import os
import tempfile

# The engine is built at import time, so point it at a scratch file first.
_DB_DIR = tempfile.mkdtemp(prefix="gitaworld-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_EMAIL"] = "root@example.com"
os.environ["SITE_URL"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

import gitaworld.models  # noqa: F401
from gitaworld.db.base import Base
from gitaworld.db.session import SessionLocal, engine
from gitaworld.main import app
from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Role, Visibility
from gitaworld.models.language import Language
from gitaworld.models.profile import Profile
from gitaworld.models.user import User
from gitaworld.models.verse import Verse
from gitaworld.utils.security import hash_password

PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _create_user(db, email, role, full_name=None):
    user = User(email=email, password_hash=hash_password(PASSWORD))
    user.profile = Profile(full_name=full_name, role=role)
    db.add(user)
    db.commit()
    return user.id


def login(client, email, password=PASSWORD):
    res = client.post(
        "/auth/login",
        data={"email": email, "password": password},
        follow_redirects=False,
    )
    assert res.status_code == 303, res.text
    return client


@pytest.fixture
def viewer_id(db):
    return _create_user(db, "viewer@example.com", Role.VIEWER, "Vera Viewer")


@pytest.fixture
def editor_id(db):
    return _create_user(db, "editor@example.com", Role.EDITOR, "Eddie Editor")


@pytest.fixture
def admin_id(db):
    return _create_user(db, "admin@example.com", Role.ADMIN, "Ada Admin")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login_as():
    """Fresh client signed in as the given account."""
    return lambda email: login(TestClient(app), email)


@pytest.fixture
def viewer_client(viewer_id):
    return login(TestClient(app), "viewer@example.com")


@pytest.fixture
def editor_client(editor_id):
    return login(TestClient(app), "editor@example.com")


@pytest.fixture
def admin_client(admin_id):
    return login(TestClient(app), "admin@example.com")


@pytest.fixture
def make_chapter(db):
    def _make(number, visibility=Visibility.PUBLISHED, title=None, **extra):
        ch = Chapter(
            chapter_number=number,
            title=title or f"Chapter title {number}",
            visibility=visibility,
            **extra,
        )
        db.add(ch)
        db.commit()
        return ch
    return _make


@pytest.fixture
def make_language(db):
    def _make(code, name=None, is_active=True, **extra):
        lang = Language(code=code, name=name or code.upper(), is_active=is_active, **extra)
        db.add(lang)
        db.commit()
        return lang
    return _make


@pytest.fixture
def make_verse(db):
    def _make(chapter, language, number, visibility=Visibility.PUBLISHED, **extra):
        verse = Verse(
            chapter_id=chapter.id,
            language_id=language.id,
            verse_number=number,
            visibility=visibility,
            **extra,
        )
        db.add(verse)
        db.commit()
        return verse
    return _make
