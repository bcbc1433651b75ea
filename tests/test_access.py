import pytest

from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Role, Visibility
from gitaworld.utils.authz import AuthContext, can_access

HTML = {"Accept": "text/html"}


@pytest.mark.parametrize(
    "role, required, allowed",
    [
        (Role.ADMIN, Role.ADMIN, True),
        (Role.ADMIN, Role.EDITOR, True),
        (Role.ADMIN, Role.VIEWER, True),
        (Role.EDITOR, Role.ADMIN, False),
        (Role.EDITOR, Role.EDITOR, True),
        (Role.EDITOR, Role.VIEWER, True),
        (Role.VIEWER, Role.ADMIN, False),
        (Role.VIEWER, Role.EDITOR, False),
        (Role.VIEWER, Role.VIEWER, True),
        (None, Role.VIEWER, False),
        ("superuser", Role.VIEWER, False),
    ],
)
def test_can_access_matrix(role, required, allowed):
    assert can_access(role, required) is allowed


def test_context_capabilities():
    editor = AuthContext(user_id=1, email="e@example.com", full_name=None, role=Role.EDITOR)
    assert editor.can_edit
    assert not editor.is_admin
    viewer = AuthContext(user_id=2, email="v@example.com", full_name=None, role=Role.VIEWER)
    assert not viewer.can_edit


def test_anonymous_admin_redirects_to_sign_in(client):
    res = client.get("/admin", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/auth?next=/admin"


def test_anonymous_form_redirect_keeps_path(client):
    res = client.get("/admin/chapter", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/auth?next=/admin/chapter"


def test_viewer_sees_access_denied_panel(viewer_client):
    res = viewer_client.get("/admin", headers=HTML)
    assert res.status_code == 403
    assert "Access Denied" in res.text
    assert "Return to Home" in res.text


def test_viewer_denied_as_json_for_non_html(viewer_client):
    res = viewer_client.get("/admin", headers={"Accept": "application/json"})
    assert res.status_code == 403
    assert res.json() == {"detail": "Access Denied"}


def test_editor_reaches_dashboard(editor_client):
    res = editor_client.get("/admin")
    assert res.status_code == 200
    assert "Admin Dashboard" in res.text
    # user management tab only exists for admins
    assert "tab=profiles" not in res.text


def test_editor_cannot_open_profiles_tab(editor_client):
    res = editor_client.get("/admin?tab=profiles", headers=HTML)
    assert res.status_code == 403


def test_editor_cannot_delete(editor_client, make_chapter, db):
    ch = make_chapter(1)
    res = editor_client.post(f"/admin/chapters/{ch.id}/delete", data={"confirm": "yes"})
    assert res.status_code == 403
    db.expire_all()
    assert db.get(Chapter, ch.id) is not None


def test_admin_sees_delete_and_profiles(admin_client, make_chapter):
    make_chapter(1, visibility=Visibility.HIDDEN)
    res = admin_client.get("/admin")
    assert res.status_code == 200
    assert "tab=profiles" in res.text
    assert "/delete" in res.text


def test_sign_in_redirect_keeps_query(client):
    res = client.get("/admin?tab=verses", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/auth?next=/admin%3Ftab%3Dverses"
