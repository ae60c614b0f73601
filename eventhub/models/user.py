"""
User model. Users are managed outside this service; rows are only read here.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from eventhub.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)

    registrations = relationship("Registration", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
