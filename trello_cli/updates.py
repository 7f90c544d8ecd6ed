"""
Composite card updates.

A CardUpdate bundle is applied in a fixed order regardless of how it was
built:

    description -> apply_labels -> clear_labels -> comment -> archive

Each step is an independent remote mutation. Execution stops at the first
failing step and raises PartialCompositeFailure naming that step and the
steps already applied; nothing is rolled back.
"""

from trello_cli.comments import post_comment
from trello_cli.exceptions import (
    CliError,
    PartialCompositeFailure,
    ResourceNotFoundError,
    ValidationError,
)
from trello_cli.locator import (
    fetch_board_labels,
    fetch_card,
    missing_label_names,
    resolve_labels_by_name,
)
from trello_cli.models import CardUpdateReport, StepResult

STEP_DESCRIPTION = "description"
STEP_APPLY_LABELS = "apply_labels"
STEP_CLEAR_LABELS = "clear_labels"
STEP_COMMENT = "comment"
STEP_ARCHIVE = "archive"

STEP_ORDER = (STEP_DESCRIPTION, STEP_APPLY_LABELS, STEP_CLEAR_LABELS, STEP_COMMENT, STEP_ARCHIVE)


def load_label_snapshot(transport, card_id):
    """Fetch the card and its board's labels once, for every label step."""
    card = fetch_card(transport, card_id)
    if not card.board_id:
        raise CliError(f"[ERROR] Card '{card_id}' has no board; cannot resolve labels.")
    return card, fetch_board_labels(transport, card.board_id)


def _check_label_names(ops, board_labels):
    missing = missing_label_names(ops.add_labels + ops.clear_labels, board_labels)
    if missing:
        available = sorted({lbl.name for lbl in board_labels if lbl.name})
        hint = f" Available: {', '.join(available)}" if available else ""
        quoted = ", ".join(f"'{name}'" for name in missing)
        raise ResourceNotFoundError(f"[ERROR] Label {quoted} not found on board.{hint}")


def apply_card_update(transport, card_id, ops):
    """Apply *ops* (a CardUpdate) to *card_id*.

    Label names are resolved against a single card/board-label snapshot taken
    before any mutation, so unknown names fail without touching the card.

    Returns:
        CardUpdateReport with one StepResult per applied step.

    Raises:
        ValidationError: the bundle has no operation (no remote call made).
        ResourceNotFoundError: a label name matches no board label.
        PartialCompositeFailure: a step failed; earlier steps stay applied.
    """
    if ops.is_empty():
        raise ValidationError(
            "[ERROR] Nothing to update. Use --desc, --label, --clear-label, --comment or --archive."
        )

    current_labels = set()
    to_apply = []
    to_clear = []
    if ops.has_label_ops:
        card, board_labels = load_label_snapshot(transport, card_id)
        _check_label_names(ops, board_labels)
        current_labels = set(card.label_ids)
        to_apply = resolve_labels_by_name(ops.add_labels, board_labels)
        to_clear = resolve_labels_by_name(ops.clear_labels, board_labels)

    steps = []
    skipped = []

    def run(step, action):
        try:
            detail = action()
        except CliError as e:
            raise PartialCompositeFailure(step, [s.step for s in steps], e) from e
        steps.append(StepResult(step, detail or {}))

    def update_description():
        transport.put(f"/cards/{card_id}", {"desc": ops.description})
        return {}

    def apply_labels():
        applied, unchanged = [], []
        for label in to_apply:
            if label.id in current_labels:
                unchanged.append(label.name)
                continue
            transport.post(f"/cards/{card_id}/idLabels", {"value": label.id})
            current_labels.add(label.id)
            applied.append(label.name)
        return {"labels": applied, "unchanged": unchanged}

    def clear_labels():
        cleared, unchanged = [], []
        for label in to_clear:
            if label.id not in current_labels:
                unchanged.append(label.name)
                continue
            transport.delete(f"/cards/{card_id}/idLabels/{label.id}")
            current_labels.discard(label.id)
            cleared.append(label.name)
        return {"labels": cleared, "unchanged": unchanged}

    def comment():
        result = post_comment(transport, card_id, ops.trimmed_comment)
        comment_id = result.get("id") if isinstance(result, dict) else None
        return {"comment_id": comment_id}

    def archive():
        result = transport.put(f"/cards/{card_id}", {"closed": True})
        return {"name": result.get("name")} if isinstance(result, dict) else {}

    if ops.description is not None:
        run(STEP_DESCRIPTION, update_description)
    if ops.add_labels:
        run(STEP_APPLY_LABELS, apply_labels)
    if ops.clear_labels:
        run(STEP_CLEAR_LABELS, clear_labels)
    if ops.comment is not None:
        if ops.trimmed_comment:
            run(STEP_COMMENT, comment)
        else:
            skipped.append(STEP_COMMENT)
    if ops.archive:
        run(STEP_ARCHIVE, archive)

    return CardUpdateReport(card_id=card_id, steps=steps, skipped=skipped)
