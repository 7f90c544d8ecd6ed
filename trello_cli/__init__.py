"""trello-cli — CLI tool for inspecting and updating Trello boards, lists, and cards."""

from trello_cli.client import TrelloClient
from trello_cli.config import VERSION
from trello_cli.exceptions import (
    AmbiguousResourceError,
    CliError,
    CredentialError,
    PartialCompositeFailure,
    PositionOutOfRange,
    ResourceNotFoundError,
    TransportError,
    ValidationError,
)
from trello_cli.types import (
    BoardListResult,
    BoardRow,
    CardDetail,
    CardMatchRow,
    CardSearchResult,
    CardUpdateResult,
    CreatedCard,
    MoveResult,
)

__all__ = [
    "VERSION",
    "TrelloClient",
    "AmbiguousResourceError",
    "CliError",
    "CredentialError",
    "PartialCompositeFailure",
    "PositionOutOfRange",
    "ResourceNotFoundError",
    "TransportError",
    "ValidationError",
    "BoardListResult",
    "BoardRow",
    "CardDetail",
    "CardMatchRow",
    "CardSearchResult",
    "CardUpdateResult",
    "CreatedCard",
    "MoveResult",
]
