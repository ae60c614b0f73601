"""
Registration model: the link between a user and an event.

Key design decisions:
- The composite primary key (user_id, event_id) is the uniqueness
  constraint. The registration service never pre-checks for duplicates;
  it relies on this key and classifies the resulting IntegrityError.
- Rows are deleted on cancellation, there is no status column.
"""

from sqlalchemy import Column, Integer, ForeignKey, PrimaryKeyConstraint, Index, func
from sqlalchemy.orm import relationship

from eventhub.db.base import Base, UTCDateTime


class Registration(Base):
    __tablename__ = "registrations"

    user_id = Column(Integer, ForeignKey("users.id", name="fk_registrations_user_id"), nullable=False)
    event_id = Column(Integer, ForeignKey("events.id", name="fk_registrations_event_id"), nullable=False)
    created_at = Column(UTCDateTime, nullable=False, server_default=func.now())

    user = relationship("User", back_populates="registrations")
    event = relationship("Event", back_populates="registrations")

    __table_args__ = (
        PrimaryKeyConstraint("user_id", "event_id", name="pk_registrations"),
        Index("ix_registrations_event_id", "event_id"),
    )

    def __repr__(self) -> str:
        return f"<Registration(user={self.user_id}, event={self.event_id})>"
