from gitaworld.models.enums import Visibility, VerseStatus
from gitaworld.models.verse import Verse


def _verse_form(chapter, language, number="1", **overrides):
    form = {
        "chapter_id": str(chapter.id),
        "language_id": str(language.id),
        "verse_number": number,
        "title": "Dhritarashtra's question",
        "sanskrit_text": "धर्मक्षेत्रे कुरुक्षेत्रे",
        "transliteration": "dharma-kshetre kuru-kshetre",
        "english_translation": "On the field of dharma",
        "youtube_url": "",
        "status": "uploaded",
        "visibility": "published",
        "keywords": "dharma, kurukshetra, ,duty",
    }
    form.update(overrides)
    return form


def test_new_verse_form_lists_active_languages(editor_client, make_chapter, make_language):
    make_chapter(1)
    make_language("hi", "Hindi")
    make_language("xx", "Retired", is_active=False)
    page = editor_client.get("/admin/verse").text
    assert "Hindi" in page
    assert "Retired" not in page


def test_create_verse(editor_client, editor_id, make_chapter, make_language, db):
    ch, lang = make_chapter(1), make_language("hi", "Hindi")
    res = editor_client.post("/admin/verse", data=_verse_form(ch, lang, is_daily_verse="on"), follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/admin?tab=verses"

    verse = db.query(Verse).one()
    assert verse.verse_number == 1
    assert verse.status == VerseStatus.UPLOADED
    assert verse.visibility == Visibility.PUBLISHED
    assert verse.is_daily_verse is True
    assert verse.keywords == ["dharma", "kurukshetra", "duty"]
    assert verse.youtube_url is None
    assert verse.created_by == editor_id


def test_defaults_to_pending_draft(editor_client, make_chapter, make_language, db):
    ch, lang = make_chapter(1), make_language("hi")
    editor_client.post("/admin/verse", data=_verse_form(ch, lang, status="", visibility=""))
    verse = db.query(Verse).one()
    assert verse.status == VerseStatus.PENDING
    assert verse.visibility == Visibility.DRAFT
    assert verse.is_daily_verse is False


def test_duplicate_triple_is_rejected(editor_client, make_chapter, make_language, make_verse, db):
    ch, lang = make_chapter(1), make_language("hi")
    make_verse(ch, lang, 1)

    res = editor_client.post("/admin/verse", data=_verse_form(ch, lang, "1"))
    assert res.status_code == 400
    assert "Verse 1 already exists for this chapter and language." in res.text
    assert db.query(Verse).count() == 1


def test_same_number_in_another_language_is_fine(editor_client, make_chapter, make_language, make_verse, db):
    ch = make_chapter(1)
    make_verse(ch, make_language("hi"), 1)
    res = editor_client.post("/admin/verse", data=_verse_form(ch, make_language("ta"), "1"), follow_redirects=False)
    assert res.status_code == 303
    assert db.query(Verse).count() == 2


def test_unknown_chapter_is_rejected(editor_client, make_chapter, make_language, db):
    ch, lang = make_chapter(1), make_language("hi")
    form = _verse_form(ch, lang)
    form["chapter_id"] = "9999"
    res = editor_client.post("/admin/verse", data=form)
    assert res.status_code == 400
    assert "Selected chapter does not exist." in res.text
    assert db.query(Verse).count() == 0


def test_verse_number_must_be_positive(editor_client, make_chapter, make_language, db):
    ch, lang = make_chapter(1), make_language("hi")
    res = editor_client.post("/admin/verse", data=_verse_form(ch, lang, "0"))
    assert res.status_code == 400
    assert db.query(Verse).count() == 0


def test_update_verse(editor_client, make_chapter, make_language, make_verse, db):
    ch, lang = make_chapter(1), make_language("hi")
    verse = make_verse(ch, lang, 1, visibility=Visibility.DRAFT)
    res = editor_client.post(
        f"/admin/verse/{verse.id}",
        data=_verse_form(ch, lang, "1", english_translation="Revised", status="processing"),
        follow_redirects=False,
    )
    assert res.status_code == 303
    db.expire_all()
    saved = db.get(Verse, verse.id)
    assert saved.english_translation == "Revised"
    assert saved.status == VerseStatus.PROCESSING
    assert saved.visibility == Visibility.PUBLISHED


def test_update_keeps_own_number(editor_client, make_chapter, make_language, make_verse, db):
    ch, lang = make_chapter(1), make_language("hi")
    verse = make_verse(ch, lang, 1)
    make_verse(ch, lang, 2)
    res = editor_client.post(f"/admin/verse/{verse.id}", data=_verse_form(ch, lang, "2"))
    assert res.status_code == 400
    res = editor_client.post(f"/admin/verse/{verse.id}", data=_verse_form(ch, lang, "1"), follow_redirects=False)
    assert res.status_code == 303


def test_edit_form_shows_keywords(editor_client, make_chapter, make_language, make_verse):
    ch, lang = make_chapter(1), make_language("hi")
    verse = make_verse(ch, lang, 1, keywords=["lotus", "detachment"])
    page = editor_client.get(f"/admin/verse/{verse.id}").text
    assert "lotus, detachment" in page


def test_dashboard_search_and_filter(editor_client, make_chapter, make_language, make_verse):
    ch1, ch2 = make_chapter(1), make_chapter(2)
    hi = make_language("hi", "Hindi")
    make_verse(ch1, hi, 1, title="Lotus leaf")
    make_verse(ch2, hi, 7, title="Steady wisdom")

    page = editor_client.get("/admin", params={"tab": "verses", "q": "lotus"}).text
    assert "Lotus leaf" in page
    assert "Steady wisdom" not in page

    page = editor_client.get("/admin", params={"tab": "verses", "chapter": str(ch2.id)}).text
    assert "Steady wisdom" in page
    assert "Lotus leaf" not in page


def test_admin_deletes_verse(admin_client, make_chapter, make_language, make_verse, db):
    verse = make_verse(make_chapter(1), make_language("hi"), 1)
    verse_id = verse.id
    res = admin_client.post(f"/admin/verses/{verse_id}/delete", data={"confirm": "yes"})
    assert "Verse deleted successfully" in res.text
    db.expire_all()
    assert db.get(Verse, verse_id) is None


def test_dashboard_search_covers_description_and_number(editor_client, make_chapter, make_language, make_verse):
    ch = make_chapter(1)
    hi = make_language("hi", "Hindi")
    make_verse(ch, hi, 12, title="Twelfth", description="On the imperishable self")
    make_verse(ch, hi, 30, title="Thirtieth")

    page = editor_client.get("/admin", params={"tab": "verses", "q": "imperishable"}).text
    assert "Twelfth" in page
    assert "Thirtieth" not in page

    page = editor_client.get("/admin", params={"tab": "verses", "q": "30"}).text
    assert "Thirtieth" in page
    assert "Twelfth" not in page
