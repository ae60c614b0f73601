"""
Event model.

Key design decisions:
- No denormalized registration counter: the count is taken from
  `registrations` inside the registration transaction, under a row lock
  on the event.
- Composite index on (date_time, location) matches the upcoming listing
  order exactly.
"""

from sqlalchemy import Column, Integer, String, Index, CheckConstraint
from sqlalchemy.orm import relationship

from eventhub.db.base import Base, TimestampMixin, UTCDateTime

MAX_CAPACITY = 1000


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    date_time = Column(UTCDateTime, nullable=False)
    location = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)

    registrations = relationship(
        "Registration",
        back_populates="event",
        order_by="Registration.created_at",
    )

    __table_args__ = (
        CheckConstraint(
            f"capacity > 0 AND capacity <= {MAX_CAPACITY}",
            name="check_event_capacity_range",
        ),
        Index("ix_events_date_time_location", "date_time", "location"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, capacity={self.capacity})>"
