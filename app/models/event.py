from app.models.enums import EventPrivacy
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    ForeignKey,
    Text,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)  # HH:MM
    location = Column(String(200), nullable=False)
    category = Column(String, nullable=False)
    privacy = Column(String, nullable=False, default=EventPrivacy.PUBLIC.value)

    organizer_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    organizer = relationship(
        "User", back_populates="organized_events", foreign_keys=[organizer_id]
    )
    tickets = relationship(
        "Ticket",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Ticket.price",
    )
    registrations = relationship(
        "Registration", back_populates="event", cascade="all, delete-orphan"
    )
    forum_posts = relationship(
        "ForumPost", back_populates="event", cascade="all, delete-orphan"
    )
    polls = relationship("Poll", back_populates="event", cascade="all, delete-orphan")
    questions = relationship("QA", back_populates="event", cascade="all, delete-orphan")
    notifications = relationship(
        "Notification", back_populates="event", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_event_privacy_date", "privacy", "date"),
        Index("idx_event_organizer", "organizer_id"),
    )

    @property
    def is_public(self) -> bool:
        return self.privacy == EventPrivacy.PUBLIC.value
