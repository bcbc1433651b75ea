from gitaworld.models.chapter import Chapter
from gitaworld.models.enums import Visibility
from gitaworld.models.verse import Verse

HTML = {"Accept": "text/html"}


def _chapter_form(**overrides):
    form = {
        "chapter_number": "1",
        "title": "Arjuna Vishada Yoga",
        "sanskrit_title": "अर्जुनविषादयोग",
        "english_title": "The Yoga of Arjuna's Dejection",
        "total_verses": "47",
        "summary": "Arjuna's dilemma.",
        "description": "",
        "visibility": "published",
        "sort_order": "1",
    }
    form.update(overrides)
    return form


def test_new_chapter_form_renders(editor_client):
    res = editor_client.get("/admin/chapter")
    assert res.status_code == 200
    assert 'name="chapter_number"' in res.text


def test_create_chapter(editor_client, client, db):
    res = editor_client.post("/admin/chapter", data=_chapter_form(), follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/admin?tab=chapters"

    ch = db.query(Chapter).filter_by(chapter_number=1).one()
    assert ch.title == "Arjuna Vishada Yoga"
    assert ch.total_verses == 47
    assert ch.description is None
    assert ch.visibility == Visibility.PUBLISHED
    assert "Arjuna Vishada Yoga" in client.get("/chapters").text


def test_create_defaults_to_draft(editor_client, db):
    editor_client.post("/admin/chapter", data=_chapter_form(visibility="", sort_order=""))
    ch = db.query(Chapter).one()
    assert ch.visibility == Visibility.DRAFT
    assert ch.sort_order == 0


def test_chapter_number_out_of_range_is_rejected(editor_client, db):
    res = editor_client.post("/admin/chapter", data=_chapter_form(chapter_number="19"))
    assert res.status_code == 400
    assert "Chapter number" in res.text
    assert db.query(Chapter).count() == 0


def test_title_is_required(editor_client, db):
    res = editor_client.post("/admin/chapter", data=_chapter_form(title="   "))
    assert res.status_code == 400
    assert db.query(Chapter).count() == 0


def test_duplicate_chapter_number_is_rejected(editor_client, make_chapter, db):
    make_chapter(1)
    res = editor_client.post("/admin/chapter", data=_chapter_form())
    assert res.status_code == 400
    assert "Chapter 1 already exists." in res.text
    assert db.query(Chapter).count() == 1


def test_edit_form_shows_current_values(editor_client, make_chapter):
    ch = make_chapter(4, title="Jnana Karma Sanyasa Yoga")
    res = editor_client.get(f"/admin/chapter/{ch.id}")
    assert res.status_code == 200
    assert "Jnana Karma Sanyasa Yoga" in res.text


def test_update_chapter(editor_client, make_chapter, db):
    ch = make_chapter(2, visibility=Visibility.DRAFT)
    res = editor_client.post(
        f"/admin/chapter/{ch.id}",
        data=_chapter_form(chapter_number="2", title="Sankhya Yoga", visibility="hidden"),
        follow_redirects=False,
    )
    assert res.status_code == 303
    db.expire_all()
    saved = db.get(Chapter, ch.id)
    assert saved.title == "Sankhya Yoga"
    assert saved.visibility == Visibility.HIDDEN


def test_update_cannot_take_another_number(editor_client, make_chapter, db):
    make_chapter(1)
    ch = make_chapter(2, title="Second")
    res = editor_client.post(f"/admin/chapter/{ch.id}", data=_chapter_form(chapter_number="1"))
    assert res.status_code == 400
    db.expire_all()
    assert db.get(Chapter, ch.id).chapter_number == 2


def test_edit_unknown_chapter_is_404(editor_client):
    assert editor_client.get("/admin/chapter/404", headers=HTML).status_code == 404


def test_delete_confirmation_page(admin_client, make_chapter, make_language, make_verse):
    ch = make_chapter(1)
    make_verse(ch, make_language("hi"), 1)
    res = admin_client.get(f"/admin/chapters/{ch.id}/delete")
    assert res.status_code == 200
    assert "This will also delete its 1 verse(s)." in res.text
    assert 'name="confirm" value="yes"' in res.text


def test_delete_requires_confirmation(admin_client, make_chapter, db):
    ch = make_chapter(1)
    res = admin_client.post(f"/admin/chapters/{ch.id}/delete", data={"confirm": "no"})
    assert res.status_code == 200
    assert "Deletion cancelled." in res.text
    db.expire_all()
    assert db.get(Chapter, ch.id) is not None


def test_delete_chapter_removes_its_verses(admin_client, make_chapter, make_language, make_verse, db):
    ch = make_chapter(1)
    other = make_chapter(2)
    lang = make_language("hi")
    make_verse(ch, lang, 1)
    make_verse(other, lang, 1)
    chapter_id = ch.id

    res = admin_client.post(f"/admin/chapters/{ch.id}/delete", data={"confirm": "yes"}, follow_redirects=False)
    assert res.status_code == 303
    db.expire_all()
    assert db.get(Chapter, chapter_id) is None
    assert db.query(Verse).count() == 1


def test_viewer_cannot_create(viewer_client, db):
    res = viewer_client.post("/admin/chapter", data=_chapter_form())
    assert res.status_code == 403
    assert db.query(Chapter).count() == 0
