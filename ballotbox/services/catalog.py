"""Option catalog business logic."""
from typing import Iterable, List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ballotbox.core.exceptions import SeedFailure
from ballotbox.core.logging_config import get_logger
from ballotbox.db.models import Option, Tally
from ballotbox.services.utils import is_unique_violation

logger = get_logger(__name__)


def count_options(db: Session) -> int:
    """Return the number of options in the catalog."""
    return db.query(func.count(Option.id)).scalar() or 0


def list_options(db: Session) -> List[Option]:
    """Return every option in ascending id order."""
    return db.query(Option).order_by(Option.id.asc()).all()


def seed_options(db: Session, names: Iterable[str]) -> bool:
    """
    Seed the catalog with ``names`` if it is empty.

    Options get ids 1..N in the given order and each one gets a zero tally.
    The whole seed is one transaction: a failure part-way leaves no rows.

    Args:
        db: SQLAlchemy session
        names: ordered option names

    Returns:
        bool: True if the catalog was seeded, False if options already existed

    Raises:
        SeedFailure: if the names are unusable or the seed could not commit
    """
    names = [name.strip() if isinstance(name, str) else name for name in names]
    if not names:
        raise SeedFailure("At least one vote option is required")
    if any(not isinstance(name, str) or not name for name in names):
        raise SeedFailure("Vote option names must be non-empty strings")
    if len(set(names)) != len(names):
        raise SeedFailure("Vote option names must be unique")

    try:
        existing = count_options(db)
        if existing > 0:
            logger.info("options_already_seeded", count=existing)
            return False

        for option_id, name in enumerate(names, start=1):
            db.add(Option(id=option_id, name=name, tally=Tally(count=0)))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not is_unique_violation(e):
            logger.error("seed_failed", error=str(e), error_type=type(e).__name__)
            raise SeedFailure(f"Seeding vote options failed: {e}") from e
        # Another process seeded between our count and our commit
        existing = count_options(db)
        if existing == 0:
            logger.error("seed_failed", error=str(e), error_type=type(e).__name__)
            raise SeedFailure(f"Seeding vote options failed: {e}") from e
        logger.info("options_already_seeded", count=existing, detected_at="commit")
        return False
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("seed_failed", error=str(e), error_type=type(e).__name__)
        raise SeedFailure(f"Seeding vote options failed: {e}") from e

    logger.info("options_seeded", count=len(names), names=names)
    return True
