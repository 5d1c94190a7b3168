"""VoterRecord model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Text, DateTime, Index

from ballotbox.db.base import Base


class VoterRecord(Base):
    __tablename__ = "voters"

    # The primary key is the one-vote-per-identity constraint; identities are
    # stored unbounded so a long forwarded address never fails the insert
    identity = Column(Text, primary_key=True)
    voted_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    __table_args__ = (Index("idx_voters_voted_at", "voted_at"),)
