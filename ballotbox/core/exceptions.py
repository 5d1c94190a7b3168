"""Voting error taxonomy.

Every error that can end a vote attempt maps to exactly one HTTP status and
one user-facing message. ``StorageFailure`` is always raised after the unit
of work has been rolled back, so retrying it is safe.
"""
from ballotbox.core.constants import (
    MSG_DUPLICATE_VOTE,
    MSG_INVALID_OPTION,
    MSG_STORAGE_FAILURE,
)


class VotingError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    message = MSG_STORAGE_FAILURE

    def __init__(self, detail: str = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidInput(VotingError):
    """The option id is not an integer in the ballot's range."""

    status_code = 400
    message = MSG_INVALID_OPTION


class DuplicateVote(VotingError):
    """The identity already has a committed vote."""

    status_code = 409
    message = MSG_DUPLICATE_VOTE


class StorageFailure(VotingError):
    """The vote transaction could not commit and was rolled back."""

    status_code = 500
    message = MSG_STORAGE_FAILURE


class OptionNotFound(LookupError):
    """No tally row exists for the option id."""

    def __init__(self, option_id: int):
        super().__init__(f"Option {option_id} does not exist")
        self.option_id = option_id


class SeedFailure(RuntimeError):
    """Seeding the option catalog failed; the service must not start."""
