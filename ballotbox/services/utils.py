"""Service utility functions."""
from sqlalchemy.exc import IntegrityError


def is_unique_violation(error: IntegrityError) -> bool:
    """
    Tell a uniqueness violation apart from other integrity errors.

    SQLite reports "UNIQUE constraint failed: voters.identity"; PostgreSQL
    reports 'duplicate key value violates unique constraint "voters_pkey"'.
    """
    message = str(error.orig if error.orig is not None else error).lower()
    return "unique constraint" in message or "duplicate key" in message
