"""
Position values for reordering cards and lists.

Trello orders siblings by a float ``pos``. Moving an item to ordinal slot N
assigns it the midpoint of its new neighbours' values, so no sibling ever
needs renumbering. ``top``/``bottom`` are passed to the API verbatim.
"""

from trello_cli import config
from trello_cli.exceptions import PositionOutOfRange
from trello_cli.models import BOTTOM, TOP


def sibling_positions(items, exclude_id=None):
    """Sorted ``pos`` values of *items*, leaving out the item being moved."""
    return sorted(item.pos for item in items if item.id != exclude_id)


def compute_position(request, siblings=None, margin=None):
    """Return the API ``pos`` value for *request*.

    Args:
        request: a PositionRequest.
        siblings: existing position values of the other items (any order).
            Only needed for numeric requests.
        margin: distance from the first/last sibling for head/tail inserts.
            A head insert that would not stay positive halves the first
            sibling's value instead.

    Returns:
        ``"top"``/``"bottom"`` or a float.

    Raises:
        PositionOutOfRange: slot is not within ``0..len(siblings)``.
    """
    if request.kind == TOP:
        return TOP
    if request.kind == BOTTOM:
        return BOTTOM
    if siblings is None:
        raise ValueError("numeric positions need the siblings' position values")

    margin = config.POSITION_MARGIN if margin is None else margin
    values = sorted(float(v) for v in siblings)
    slot = request.slot
    if slot < 0 or slot > len(values):
        raise PositionOutOfRange(slot, len(values))
    if not values:
        return TOP
    if slot == 0:
        # Trello only accepts positive pos values.
        head = values[0] - margin
        if head > 0:
            return head
        if values[0] > 0:
            return values[0] / 2.0
        return TOP
    if slot == len(values):
        return values[-1] + margin
    # Equal neighbours collapse to the shared value; float precision is the limit.
    return (values[slot - 1] + values[slot]) / 2.0
