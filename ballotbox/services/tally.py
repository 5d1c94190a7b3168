"""Tally store."""
from sqlalchemy.orm import Session

from ballotbox.core.exceptions import OptionNotFound
from ballotbox.db.models import Option, Tally


def increment(db: Session, option_id: int) -> None:
    """Add one vote to an option's tally inside the caller's transaction.

    The addition happens in a single UPDATE statement, so concurrent
    increments of the same row serialize in the database instead of
    overwriting each other. Nothing is committed here.

    Args:
        db: SQLAlchemy session
        option_id: the option id

    Raises:
        OptionNotFound: if the option has no tally row
    """
    updated = (
        db.query(Tally)
        .filter(Tally.option_id == option_id)
        .update({Tally.count: Tally.count + 1}, synchronize_session=False)
    )
    if updated == 0:
        raise OptionNotFound(option_id)


def snapshot(db: Session) -> dict:
    """Read every option's committed count and the grand total.

    Args:
        db: SQLAlchemy session

    Returns:
        dict: ``{"total": int, "resultados": [{"id", "nombre", "cantidad"}, ...]}``
        with options in ascending id order
    """
    rows = (
        db.query(Option.id, Option.name, Tally.count)
        .join(Tally, Tally.option_id == Option.id)
        .order_by(Option.id.asc())
        .all()
    )

    resultados = [
        {"id": option_id, "nombre": name, "cantidad": count}
        for option_id, name, count in rows
    ]
    return {
        "total": sum(item["cantidad"] for item in resultados),
        "resultados": resultados,
    }
