"""
trello-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, not-found, network, parse errors."""

    exit_code = 1
    error_type = "error"


class CredentialError(CliError):
    """Exit code 2 — no usable API key/token pair."""

    exit_code = 2
    error_type = "setup_needed"


class ValidationError(CliError):
    """Bad user input, detected before any remote call."""

    error_type = "validation"


class ResourceNotFoundError(CliError):
    """A filter that must match exactly one resource matched none."""

    error_type = "not_found"


class AmbiguousResourceError(CliError):
    """A filter that must match exactly one resource matched several."""

    error_type = "ambiguous"


class PositionOutOfRange(ValidationError):
    """Requested ordinal slot lies outside the sibling range."""

    error_type = "position_out_of_range"

    def __init__(self, slot, sibling_count):
        self.slot = slot
        self.sibling_count = sibling_count
        super().__init__(
            f"[ERROR] Position {slot + 1} is out of range "
            f"(valid: 1-{sibling_count + 1}, top, bottom)."
        )


class TransportError(CliError):
    """Network or API failure. Carries the HTTP status when there is one."""

    error_type = "transport"

    def __init__(self, message, status=None):
        self.status = status
        super().__init__(message)


class PartialCompositeFailure(CliError):
    """A multi-step card update stopped at *step*.

    Steps in *completed* were applied remotely and are not rolled back.
    """

    error_type = "partial_failure"

    def __init__(self, step, completed, cause):
        self.step = step
        self.completed = list(completed)
        self.cause = cause
        done = ", ".join(self.completed) if self.completed else "none"
        super().__init__(
            f"[ERROR] Card update failed at step '{step}': {cause}\n"
            f"[ERROR] Steps already applied (not rolled back): {done}"
        )


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
