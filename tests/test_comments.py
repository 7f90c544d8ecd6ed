"""Tests for comments.py — cursor pagination and chronological order."""

from datetime import datetime, timedelta, timezone

import pytest
from conftest import FakeTransport

from trello_cli.comments import fetch_all_comments, post_comment
from trello_cli.exceptions import ValidationError

CARD = "c1"
PATH = f"/cards/{CARD}/actions"
_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _action(n, full_name="Ada Lovelace", username="ada"):
    """Action number *n*; higher n is newer."""
    return {
        "id": f"a{n:05d}",
        "date": (_T0 + timedelta(minutes=n)).isoformat().replace("+00:00", "Z"),
        "memberCreator": {"fullName": full_name, "username": username},
        "data": {"text": f"comment {n}"},
    }


def _newest_first_pages(sizes):
    """Split ``sum(sizes)`` actions into API-order (newest first) pages."""
    n = sum(sizes)
    actions = [_action(i) for i in range(n - 1, -1, -1)]
    pages, start = [], 0
    for size in sizes:
        pages.append(actions[start : start + size])
        start += size
    return pages


class TestFetchAllComments:
    def test_drains_until_short_page(self):
        t = FakeTransport()
        t.queue("GET", PATH, _newest_first_pages([1000, 1000, 3]))
        comments = fetch_all_comments(t, CARD)
        assert len(t.calls) == 3
        assert len(comments) == 2003
        stamps = [c.created_at for c in comments]
        assert stamps == sorted(stamps)

    def test_cursor_is_last_id_of_previous_page(self):
        t = FakeTransport()
        pages = _newest_first_pages([2, 2, 1])
        t.queue("GET", PATH, pages)
        fetch_all_comments(t, CARD, page_size=2)
        params = [c[2] for c in t.calls]
        assert "before" not in params[0]
        assert params[1]["before"] == pages[0][-1]["id"]
        assert params[2]["before"] == pages[1][-1]["id"]
        assert all(p["filter"] == "commentCard" and p["limit"] == 2 for p in params)

    def test_stops_on_empty_page(self):
        t = FakeTransport()
        t.queue("GET", PATH, _newest_first_pages([2, 2]) + [[]])
        comments = fetch_all_comments(t, CARD, page_size=2)
        assert len(t.calls) == 3
        assert len(comments) == 4

    def test_no_comments(self):
        t = FakeTransport({("GET", PATH): []})
        assert fetch_all_comments(t, CARD) == []
        assert len(t.calls) == 1

    def test_display_fields(self):
        t = FakeTransport({("GET", PATH): [_action(5)]})
        (comment,) = fetch_all_comments(t, CARD)
        assert comment.to_dict() == {
            "date": "2024-01-01 00:05",
            "author": "Ada Lovelace",
            "text": "comment 5",
        }

    def test_author_falls_back_to_username(self):
        t = FakeTransport({("GET", PATH): [_action(1, full_name=None)]})
        assert fetch_all_comments(t, CARD)[0].author == "ada"

    def test_offset_timestamp_shown_in_utc(self):
        action = _action(0)
        action["date"] = "2024-03-01T23:30:00-02:00"
        t = FakeTransport({("GET", PATH): [action]})
        assert fetch_all_comments(t, CARD)[0].display_date == "2024-03-02 01:30"


class TestPostComment:
    def test_posts_trimmed_text(self):
        t = FakeTransport({("POST", f"/cards/{CARD}/actions/comments"): {"id": "new"}})
        post_comment(t, CARD, "  hello  ")
        assert t.calls[0][3] == {"text": "hello"}

    def test_blank_rejected_without_call(self):
        t = FakeTransport()
        with pytest.raises(ValidationError):
            post_comment(t, CARD, "   ")
        assert t.calls == []
