"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here so create_all() sees them
from ballotbox.db.models.option import Option  # noqa: F401, E402
from ballotbox.db.models.tally import Tally  # noqa: F401, E402
from ballotbox.db.models.voter import VoterRecord  # noqa: F401, E402
