"""Results query service."""
from sqlalchemy.orm import Session

from ballotbox.services.tally import snapshot


def get_results(db: Session) -> dict:
    """Return the current committed tallies, exactly as the tally store reports them."""
    return snapshot(db)
