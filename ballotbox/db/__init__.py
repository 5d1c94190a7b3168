"""Database package."""
from ballotbox.db.session import Database, get_db
from ballotbox.db.base import Base

__all__ = ["Database", "get_db", "Base"]
