"""Voter registry."""
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ballotbox.db.models import VoterRecord
from ballotbox.services.utils import is_unique_violation


def register_if_absent(db: Session, identity: str, voted_at: datetime) -> bool:
    """Insert a voter record unless the identity already has one.

    There is no lookup before the insert: the primary key on
    ``voters.identity`` decides, so two concurrent callers with the same
    identity cannot both succeed. On a duplicate the unit of work is rolled
    back, which is why this must be the first write of its transaction.

    Args:
        db: SQLAlchemy session
        identity: opaque voter identity
        voted_at: timestamp to record

    Returns:
        bool: True if the identity was newly registered, False if it was present

    Raises:
        IntegrityError: for integrity violations other than the duplicate
    """
    db.add(VoterRecord(identity=identity, voted_at=voted_at))
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            return False
        raise
    return True


def has_voted(db: Session, identity: str) -> bool:
    """Check whether a committed voter record exists for ``identity``."""
    return db.get(VoterRecord, identity) is not None


def count_voters(db: Session) -> int:
    """Return the number of committed voter records."""
    return db.query(func.count(VoterRecord.identity)).scalar() or 0
