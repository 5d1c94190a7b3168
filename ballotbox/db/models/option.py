"""Option model."""
from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship

from ballotbox.core.constants import OPTION_NAME_MAX_LENGTH
from ballotbox.db.base import Base


class Option(Base):
    __tablename__ = "options"

    # Ids are assigned explicitly (1..N) at seed time
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(OPTION_NAME_MAX_LENGTH), nullable=False, unique=True)

    # Relationships
    tally = relationship("Tally", back_populates="option", uselist=False)

    __table_args__ = (
        CheckConstraint("id > 0", name="ck_options_id_positive"),
        CheckConstraint("length(name) > 0", name="ck_options_name_not_empty"),
    )

    def __repr__(self):
        return f"<Option id={self.id} name={self.name!r}>"
