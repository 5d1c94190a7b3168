"""Database models."""
from ballotbox.db.models.option import Option
from ballotbox.db.models.tally import Tally
from ballotbox.db.models.voter import VoterRecord

__all__ = ["Option", "Tally", "VoterRecord"]
