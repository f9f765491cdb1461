"""
Tests for the storage provider.
"""

import pytest

from boibritto.providers import DuplicateRecordError


def _book(storage, author, **overrides):
    data = {"author_id": author["id"], "title": "A Book", "genres": ["fiction"], "visibility": "public"}
    data.update(overrides)
    return storage.create_book(data)


def _chapter(storage, book, number, content="one two three", visibility="private"):
    return storage.create_chapter(
        {
            "book_id": book["id"],
            "author_id": book["author_id"],
            "title": f"Chapter {number}",
            "content": content,
            "chapter_number": number,
            "visibility": visibility,
            "word_count": len(content.split()),
        }
    )


def test_create_and_get_user(storage, alice):
    """Test creating and retrieving a user by id and by uid."""
    assert alice["username"] == "alice"
    assert alice["interested_genres"] == []

    assert storage.get_user(alice["id"])["email"] == "alice@example.com"
    assert storage.get_user_by_uid("uid-alice")["id"] == alice["id"]
    assert storage.get_user_by_uid("uid-nobody") is None


def test_duplicate_username_rejected(storage, alice):
    with pytest.raises(DuplicateRecordError):
        storage.create_user(
            {"uid": "uid-other", "email": "other@example.com", "username": "alice", "display_name": "Other"}
        )


def test_duplicate_display_name_rejected(storage, alice):
    with pytest.raises(DuplicateRecordError):
        storage.create_user(
            {"uid": "uid-other", "email": "other@example.com", "username": "other", "display_name": "Alice"}
        )
    assert storage.get_user_by_uid("uid-other") is None


def test_book_defaults_and_author_summary(storage, alice):
    book = storage.create_book({"author_id": alice["id"], "title": "Draft"})

    assert book["visibility"] == "private"
    assert book["is_completed"] is False
    assert book["likes"] == []
    assert book["like_count"] == 0
    assert book["author"] == {"id": alice["id"], "username": "alice", "display_name": "Alice", "avatar": None}


def test_list_books_with_chapter_stats(storage, alice):
    """Test that listed books carry chapter count and total word count."""
    book = _book(storage, alice)
    _chapter(storage, book, 1, content="a b c")
    _chapter(storage, book, 2, content="d e")
    empty = _book(storage, alice, title="Empty")

    books, total = storage.list_books(author_id=alice["id"], public_only=False)

    assert total == 2
    stats = {b["id"]: (b["chapter_count"], b["total_word_count"]) for b in books}
    assert stats[book["id"]] == (2, 5)
    assert stats[empty["id"]] == (0, 0)


def test_list_books_filters(storage, alice, bob):
    _book(storage, alice, title="The Silent River", genres=["mystery"])
    _book(storage, alice, title="Hidden", visibility="private")
    _book(storage, bob, title="River Songs", genres=["poetry"], is_completed=True)

    public, total = storage.list_books()
    assert total == 2
    assert {b["title"] for b in public} == {"The Silent River", "River Songs"}

    found, _ = storage.list_books(search="river")
    assert len(found) == 2

    mystery, _ = storage.list_books(genre="mystery")
    assert [b["title"] for b in mystery] == ["The Silent River"]

    done, _ = storage.list_books(completed=True)
    assert [b["title"] for b in done] == ["River Songs"]

    mine, _ = storage.list_books(author_id=alice["id"], public_only=False)
    assert len(mine) == 2


def test_list_books_pagination(storage, alice):
    for i in range(5):
        _book(storage, alice, title=f"Book {i}")

    page, total = storage.list_books(limit=2, offset=4)
    assert total == 5
    assert len(page) == 1


def test_chapter_number_unique_per_book(storage, alice):
    book = _book(storage, alice)
    other = _book(storage, alice, title="Other")
    _chapter(storage, book, 1)
    _chapter(storage, other, 1)

    with pytest.raises(DuplicateRecordError):
        _chapter(storage, book, 1)
    assert storage.count_chapters(book["id"]) == 1


def test_list_chapters_excludes_content(storage, alice):
    book = _book(storage, alice)
    _chapter(storage, book, 2, visibility="public")
    _chapter(storage, book, 1)

    chapters = storage.list_chapters(book["id"])
    assert [c["chapter_number"] for c in chapters] == [1, 2]
    assert all("content" not in c for c in chapters)

    public = storage.list_chapters(book["id"], visibility="public")
    assert [c["chapter_number"] for c in public] == [2]


def test_get_chapter_includes_book_summary(storage, alice):
    book = _book(storage, alice, title="Parent")
    chapter = _chapter(storage, book, 1, content="hello world")

    fetched = storage.get_chapter(chapter["id"])
    assert fetched["content"] == "hello world"
    assert fetched["book"]["title"] == "Parent"
    assert fetched["book"]["author_id"] == alice["id"]


def test_toggle_like_twice_restores_state(storage, alice, bob):
    book = _book(storage, alice)

    assert storage.toggle_like("book", book["id"], bob["id"]) == (True, 1)
    assert storage.get_book(book["id"])["likes"] == [bob["id"]]

    assert storage.toggle_like("book", book["id"], bob["id"]) == (False, 0)
    assert storage.get_book(book["id"])["likes"] == []


def test_delete_book_removes_chapters_and_likes(storage, alice, bob):
    """Test that deleting a book removes its chapters and all likes."""
    book = _book(storage, alice)
    chapter = _chapter(storage, book, 1, visibility="public")
    _chapter(storage, book, 2)
    storage.toggle_like("book", book["id"], bob["id"])
    storage.toggle_like("chapter", chapter["id"], bob["id"])

    assert storage.delete_book(book["id"]) == 2

    assert storage.get_book(book["id"]) is None
    assert storage.get_chapter(chapter["id"]) is None
    assert storage.list_chapters(book["id"]) == []
    # A re-like after deletion starts from zero
    assert storage.toggle_like("chapter", chapter["id"], bob["id"]) == (True, 1)


def _discussion(storage, user):
    return storage.create_discussion(
        {"user_id": user["id"], "title": "Talk", "content": "Body", "visibility": "public", "spoiler_alert": False}
    )


def _comment(storage, discussion, user, parent=None):
    return storage.create_comment(
        {
            "discussion_id": discussion["id"],
            "user_id": user["id"],
            "content": "hi",
            "spoiler_alert": False,
            "parent_comment": parent["id"] if parent else None,
        }
    )


def test_delete_comment_with_replies(storage, alice, bob):
    discussion = _discussion(storage, alice)
    top = _comment(storage, discussion, alice)
    _comment(storage, discussion, bob, parent=top)
    _comment(storage, discussion, alice, parent=top)
    keep = _comment(storage, discussion, bob)

    assert storage.delete_comment(top["id"]) == 3

    remaining = storage.list_comments(discussion["id"])
    assert [c["id"] for c in remaining] == [keep["id"]]


def test_delete_reply_only(storage, alice):
    discussion = _discussion(storage, alice)
    top = _comment(storage, discussion, alice)
    reply = _comment(storage, discussion, alice, parent=top)

    assert storage.delete_comment(reply["id"]) == 1
    assert storage.get_comment(top["id"]) is not None


def test_delete_discussion_removes_comments(storage, alice):
    discussion = _discussion(storage, alice)
    top = _comment(storage, discussion, alice)
    _comment(storage, discussion, alice, parent=top)

    assert storage.delete_discussion(discussion["id"]) == 2
    assert storage.get_discussion(discussion["id"]) is None
    assert storage.get_comment(top["id"]) is None


def test_report_unique_per_reporter_target_and_type(storage, alice, bob):
    report = {
        "reporter_id": bob["id"],
        "report_type": "user",
        "target_id": alice["id"],
        "reason": "spam",
        "status": "pending",
    }
    created = storage.create_report(report)
    assert created["reviewed_by"] is None
    assert created["reviewed_at"] is None
    assert created["admin_notes"] is None

    with pytest.raises(DuplicateRecordError):
        storage.create_report(report)

    # Same target under another type is a different report
    storage.create_report({**report, "report_type": "userbook"})

    reports, total = storage.list_reports(bob["id"])
    assert total == 2
    _, users_only = storage.list_reports(bob["id"], report_type="user")
    assert users_only == 1


def test_collection_books_round_trip(storage, alice):
    collection = storage.create_collection(
        {
            "user_id": alice["id"],
            "title": "Favourites",
            "books": [{"volume_id": "vol-1", "added_at": "2024-01-01T00:00:00+00:00"}],
            "tags": ["cozy"],
            "visibility": "private",
        }
    )

    assert collection["books"][0]["volume_id"] == "vol-1"
    assert collection["tags"] == ["cozy"]
    assert collection["user"]["username"] == "alice"

    public, _ = storage.list_collections(owner_id=alice["id"])
    assert public == []
    own, _ = storage.list_collections(owner_id=alice["id"], public_only=False)
    assert len(own) == 1


def test_reading_item_unique_per_volume(storage, alice):
    storage.create_reading_item({"user_id": alice["id"], "volume_id": "vol-1", "status": "interested"})

    with pytest.raises(DuplicateRecordError):
        storage.create_reading_item({"user_id": alice["id"], "volume_id": "vol-1", "status": "reading"})

    assert len(storage.list_reading_items(alice["id"])) == 1
