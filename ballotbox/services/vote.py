"""Vote business logic."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ballotbox.core.exceptions import DuplicateVote, InvalidInput, OptionNotFound, StorageFailure
from ballotbox.core.logging_config import get_logger
from ballotbox.services.registry import register_if_absent
from ballotbox.services.tally import increment
from ballotbox.services.utils import is_unique_violation

logger = get_logger(__name__)


@dataclass(frozen=True)
class VoteReceipt:
    """A committed vote."""
    option_id: int
    identity: str
    voted_at: datetime


def validate_option_id(option_id: Any, max_option_id: int) -> int:
    """Return ``option_id`` as an int if it is an integer in [1, max_option_id].

    JSON does not distinguish 3 from 3.0, so integral floats are accepted.
    """
    # bool is an int subclass; JSON true must not count as option 1
    if isinstance(option_id, bool):
        raise InvalidInput(f"optionId must be an integer, got {option_id!r}")
    if isinstance(option_id, float) and option_id.is_integer():
        option_id = int(option_id)
    if not isinstance(option_id, int):
        raise InvalidInput(f"optionId must be an integer, got {option_id!r}")
    if option_id < 1 or option_id > max_option_id:
        raise InvalidInput(f"optionId {option_id} outside 1..{max_option_id}")
    return option_id


def cast_vote(
    db: Session,
    option_id: Any,
    identity: str,
    max_option_id: int,
    now: Optional[datetime] = None,
) -> VoteReceipt:
    """Register ``identity`` and count its vote for ``option_id`` atomically.

    The voter record insert and the tally increment commit together or not
    at all; readers never see one without the other.

    Args:
        db: SQLAlchemy session with no pending writes
        option_id: requested option, validated before storage is touched
        identity: opaque voter identity
        max_option_id: highest valid option id
        now: vote timestamp, defaults to the current UTC time

    Returns:
        VoteReceipt for the committed vote

    Raises:
        InvalidInput: option_id is not an integer in range, or identity is empty
        DuplicateVote: identity already voted; no tally changed
        StorageFailure: the transaction was rolled back; safe to retry
    """
    log = logger.bind(identity=identity, option_id=option_id)

    option_id = validate_option_id(option_id, max_option_id)
    if not identity:
        raise InvalidInput("identity is required")

    voted_at = now or datetime.now(timezone.utc)

    try:
        registered = register_if_absent(db, identity, voted_at)
        if registered:
            increment(db, option_id)
            db.commit()
    except OptionNotFound as e:
        db.rollback()
        log.error("vote_rolled_back", reason=str(e))
        raise StorageFailure(str(e)) from e
    except IntegrityError as e:
        db.rollback()
        # A racing duplicate can surface at commit rather than at flush
        if is_unique_violation(e):
            log.info("vote_duplicate", detected_at="commit")
            raise DuplicateVote() from e
        log.error("vote_rolled_back", reason=str(e))
        raise StorageFailure(str(e)) from e
    except SQLAlchemyError as e:
        db.rollback()
        log.error("vote_rolled_back", reason=str(e), error_type=type(e).__name__)
        raise StorageFailure(str(e)) from e

    if not registered:
        log.info("vote_duplicate", detected_at="insert")
        raise DuplicateVote()

    log.info("vote_registered")
    return VoteReceipt(option_id=option_id, identity=identity, voted_at=voted_at)
