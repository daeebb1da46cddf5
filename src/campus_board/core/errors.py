"""Error taxonomy shared by the feed engine, the store and the API layer."""

from __future__ import annotations


class BoardError(Exception):
    """Base class for every failure the board reports to its callers."""


class ValidationError(BoardError):
    """A submission is missing a required field."""


class ModerationRejected(BoardError):
    """Submitted text matched the banned-term list.

    The message is the generic reason shown to the author; the matched term is
    never included.
    """


class Unauthorized(BoardError):
    """The caller does not own the resource it tried to change."""


class NotFound(BoardError):
    """The targeted post or report does not exist."""


class StoreUnavailable(BoardError):
    """The backing store failed or timed out."""


class InvalidTransition(BoardError):
    """A report was asked to leave a terminal status."""
