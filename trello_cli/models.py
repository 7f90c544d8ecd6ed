"""
Typed models for Trello resources and command payloads.

All remote resources are transient read models built fresh per invocation
from decoded API responses (``from_api``).
"""

from dataclasses import dataclass, field
from datetime import datetime

from trello_cli._utils import _parse_iso_timestamp, format_minute
from trello_cli.exceptions import CliError, ValidationError


def _expect_object(value, context):
    if isinstance(value, dict):
        return value
    raise CliError(
        f"[ERROR] Unexpected {context} response shape: "
        f"expected JSON object, got {type(value).__name__}."
    )


def _expect_list(value, context):
    if isinstance(value, list):
        return value
    raise CliError(
        f"[ERROR] Unexpected {context} response shape: "
        f"expected JSON array, got {type(value).__name__}."
    )


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Credential:
    """API key/token pair. Values are excluded from repr()."""

    key: str = field(repr=False)
    token: str = field(repr=False)
    source: str = "unknown"


# ---------------------------------------------------------------------------
# Remote resources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Board:
    id: str
    name: str
    closed: bool = False

    @classmethod
    def from_api(cls, data):
        data = _expect_object(data, "board")
        return cls(id=data["id"], name=data.get("name") or "", closed=bool(data.get("closed")))


@dataclass(frozen=True)
class TrelloList:
    id: str
    name: str
    board_id: str | None = None
    pos: float = 0.0

    @classmethod
    def from_api(cls, data):
        data = _expect_object(data, "list")
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            board_id=data.get("idBoard"),
            pos=float(data.get("pos") or 0.0),
        )


@dataclass(frozen=True)
class Card:
    id: str
    name: str
    list_id: str
    board_id: str | None = None
    description: str = ""
    label_ids: frozenset = frozenset()
    closed: bool = False
    pos: float = 0.0

    @classmethod
    def from_api(cls, data):
        data = _expect_object(data, "card")
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            list_id=data.get("idList") or "",
            board_id=data.get("idBoard"),
            description=data.get("desc") or "",
            label_ids=frozenset(data.get("idLabels") or ()),
            closed=bool(data.get("closed")),
            pos=float(data.get("pos") or 0.0),
        )


@dataclass(frozen=True)
class Label:
    id: str
    name: str
    color: str | None = None

    @classmethod
    def from_api(cls, data):
        data = _expect_object(data, "label")
        return cls(id=data["id"], name=data.get("name") or "", color=data.get("color"))


@dataclass(frozen=True)
class Comment:
    """A ``commentCard`` action. ``created_at`` is kept for ordering."""

    id: str
    created_at: datetime | None
    author: str
    text: str
    raw_date: str = ""

    @classmethod
    def from_api(cls, data):
        data = _expect_object(data, "comment action")
        member = data.get("memberCreator") or {}
        author = member.get("fullName") or member.get("username") or "unknown"
        raw_date = data.get("date") or ""
        return cls(
            id=data["id"],
            created_at=_parse_iso_timestamp(raw_date),
            author=author,
            text=(data.get("data") or {}).get("text") or "",
            raw_date=raw_date,
        )

    @property
    def display_date(self):
        if self.created_at is None:
            return self.raw_date
        return format_minute(self.created_at)

    def to_dict(self):
        return {"date": self.display_date, "author": self.author, "text": self.text}


# ---------------------------------------------------------------------------
# Command payloads
# ---------------------------------------------------------------------------

TOP = "top"
BOTTOM = "bottom"
NUMERIC = "numeric"


@dataclass(frozen=True)
class PositionRequest:
    """Where to move an item: ``top``, ``bottom``, or ordinal slot (0-based)."""

    kind: str
    slot: int | None = None

    @classmethod
    def top(cls):
        return cls(TOP)

    @classmethod
    def bottom(cls):
        return cls(BOTTOM)

    @classmethod
    def numeric(cls, slot):
        return cls(NUMERIC, int(slot))

    @classmethod
    def parse(cls, raw):
        """Parse a CLI position: ``top``, ``bottom``, or a 1-based position."""
        value = (raw or "").strip().lower()
        if value == TOP:
            return cls.top()
        if value == BOTTOM:
            return cls.bottom()
        try:
            ordinal = int(value)
        except ValueError:
            raise ValidationError(
                f"[ERROR] Invalid position '{raw}'. Use top, bottom, or a positive number."
            ) from None
        if ordinal < 1:
            raise ValidationError(
                f"[ERROR] Invalid position '{raw}'. Positions start at 1."
            )
        return cls.numeric(ordinal - 1)

    @property
    def needs_siblings(self):
        return self.kind == NUMERIC


def _clean_names(names):
    return tuple(n for n in (names or ()) if n is not None and n.strip())


@dataclass(frozen=True)
class CardUpdate:
    """Unordered bundle of card mutations, applied in a fixed order."""

    description: str | None = None
    add_labels: tuple = ()
    clear_labels: tuple = ()
    comment: str | None = None
    archive: bool = False

    @classmethod
    def from_kwargs(
        cls,
        *,
        description=None,
        add_labels=None,
        clear_labels=None,
        comment=None,
        archive=False,
    ):
        return cls(
            description=description,
            add_labels=_clean_names(add_labels),
            clear_labels=_clean_names(clear_labels),
            comment=comment,
            archive=bool(archive),
        )

    @classmethod
    def from_namespace(cls, ns):
        return cls.from_kwargs(
            description=getattr(ns, "desc", None),
            add_labels=getattr(ns, "label", None),
            clear_labels=getattr(ns, "clear_label", None),
            comment=getattr(ns, "comment", None),
            archive=getattr(ns, "archive", False),
        )

    @property
    def trimmed_comment(self):
        if self.comment is None:
            return ""
        return self.comment.strip()

    @property
    def has_label_ops(self):
        return bool(self.add_labels or self.clear_labels)

    def is_empty(self):
        return (
            self.description is None
            and not self.has_label_ops
            and not self.trimmed_comment
            and not self.archive
        )


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StepResult:
    step: str
    detail: dict = field(default_factory=dict)

    def to_dict(self):
        out = {"step": self.step, "ok": True}
        out.update(self.detail)
        return out


@dataclass(frozen=True)
class CardUpdateReport:
    card_id: str
    steps: list[StepResult]
    skipped: list[str] = field(default_factory=list)

    @property
    def applied(self):
        return [s.step for s in self.steps]

    def to_dict(self):
        out = {
            "ok": True,
            "card_id": self.card_id,
            "steps": [s.to_dict() for s in self.steps],
        }
        if self.skipped:
            out["skipped"] = list(self.skipped)
        return out


@dataclass(frozen=True)
class CardMatch:
    """One ``find`` hit: the card plus the names of its board and list."""

    id: str
    board: str
    list: str
    title: str

    def to_dict(self):
        return {"id": self.id, "board": self.board, "list": self.list, "title": self.title}


@dataclass(frozen=True)
class SearchResult:
    """Matches of a search; ``notice`` explains an empty result."""

    matches: list[CardMatch]
    notice: str | None = None

    def to_dict(self):
        out = {"cards": [m.to_dict() for m in self.matches], "count": len(self.matches)}
        if self.notice:
            out["notice"] = self.notice
        return out
