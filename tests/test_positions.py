"""Tests for positions.py and PositionRequest parsing."""

from types import SimpleNamespace

import pytest

from trello_cli.exceptions import PositionOutOfRange, ValidationError
from trello_cli.models import PositionRequest
from trello_cli.positions import compute_position, sibling_positions

SIBLINGS = [1.0, 2.0, 3.0]


class TestComputePosition:
    def test_top_and_bottom_need_no_siblings(self):
        assert compute_position(PositionRequest.top()) == "top"
        assert compute_position(PositionRequest.bottom()) == "bottom"

    def test_between_first_and_second(self):
        value = compute_position(PositionRequest.numeric(1), SIBLINGS)
        assert 1.0 < value < 2.0

    def test_head_insert_is_below_first(self):
        assert compute_position(PositionRequest.numeric(0), SIBLINGS) < 1.0

    def test_tail_insert_is_above_last(self):
        assert compute_position(PositionRequest.numeric(3), SIBLINGS) > 3.0

    def test_siblings_in_any_order(self):
        value = compute_position(PositionRequest.numeric(2), [3.0, 1.0, 2.0])
        assert value == 2.5

    def test_margin_applied_at_edges(self):
        assert compute_position(PositionRequest.numeric(0), SIBLINGS, margin=0.5) == 0.5
        assert compute_position(PositionRequest.numeric(3), SIBLINGS, margin=0.5) == 3.5

    def test_head_insert_keeps_margin_when_room(self):
        assert compute_position(PositionRequest.numeric(0), [40000.0, 50000.0]) == 23616.0

    def test_head_insert_stays_positive(self):
        value = compute_position(PositionRequest.parse("1"), [16384.0, 32768.0])
        assert 0 < value < 16384.0

    def test_head_insert_below_zero_first_goes_to_top(self):
        assert compute_position(PositionRequest.numeric(0), [0.0, 5.0]) == "top"

    def test_out_of_range(self):
        with pytest.raises(PositionOutOfRange) as exc_info:
            compute_position(PositionRequest.numeric(4), SIBLINGS)
        assert exc_info.value.slot == 4
        assert exc_info.value.sibling_count == 3
        assert "valid: 1-4" in str(exc_info.value)

    def test_negative_slot_out_of_range(self):
        with pytest.raises(PositionOutOfRange):
            compute_position(PositionRequest.numeric(-1), SIBLINGS)

    def test_equal_neighbours_do_not_fail(self):
        assert compute_position(PositionRequest.numeric(1), [5.0, 5.0]) == 5.0

    def test_no_siblings_goes_to_top(self):
        assert compute_position(PositionRequest.numeric(0), []) == "top"

    def test_numeric_without_siblings_is_programming_error(self):
        with pytest.raises(ValueError):
            compute_position(PositionRequest.numeric(0))


class TestSiblingPositions:
    def test_excludes_moved_item_and_sorts(self):
        items = [
            SimpleNamespace(id="a", pos=300.0),
            SimpleNamespace(id="b", pos=100.0),
            SimpleNamespace(id="c", pos=200.0),
        ]
        assert sibling_positions(items, exclude_id="c") == [100.0, 300.0]


class TestPositionRequestParse:
    @pytest.mark.parametrize("raw", ["top", "TOP", " top "])
    def test_top(self, raw):
        assert PositionRequest.parse(raw) == PositionRequest.top()

    def test_bottom(self):
        assert PositionRequest.parse("bottom") == PositionRequest.bottom()

    def test_one_based_number(self):
        req = PositionRequest.parse("2")
        assert req.slot == 1
        assert req.needs_siblings

    @pytest.mark.parametrize("raw", ["0", "-3", "middle", "", "1.5"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValidationError):
            PositionRequest.parse(raw)
