"""Comment feed pagination and posting."""

from trello_cli import config
from trello_cli.exceptions import ValidationError
from trello_cli.models import Comment, _expect_list


def fetch_all_comments(transport, card_id, page_size=None):
    """Drain every ``commentCard`` action of a card, oldest first.

    Trello returns actions newest-first in pages of at most *page_size*;
    each further page is requested with ``before=<id of the last action>``.
    Stops on an empty page or a page shorter than *page_size*.
    """
    page_size = page_size or config.COMMENT_PAGE_SIZE
    actions = []
    before = None
    while True:
        params = {"filter": "commentCard", "limit": page_size}
        if before is not None:
            params["before"] = before
        page = _expect_list(transport.get(f"/cards/{card_id}/actions", params=params), "actions")
        if not page:
            break
        actions.extend(page)
        before = page[-1]["id"]
        if len(page) < page_size:
            break
    actions.reverse()
    return [Comment.from_api(action) for action in actions]


def post_comment(transport, card_id, text):
    """Add a comment to a card. *text* must be non-blank."""
    text = (text or "").strip()
    if not text:
        raise ValidationError("[ERROR] Comment text cannot be empty.")
    return transport.post(f"/cards/{card_id}/actions/comments", {"text": text})
