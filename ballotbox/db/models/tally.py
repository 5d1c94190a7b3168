"""Tally model."""
from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from ballotbox.db.base import Base


class Tally(Base):
    __tablename__ = "tallies"

    option_id = Column(Integer, ForeignKey("options.id"), primary_key=True)
    count = Column(Integer, nullable=False, default=0)

    # Relationships
    option = relationship("Option", back_populates="tally")

    __table_args__ = (CheckConstraint("count >= 0", name="ck_tallies_count_non_negative"),)
