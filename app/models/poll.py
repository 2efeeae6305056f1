from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Boolean,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Poll(Base):
    __tablename__ = "polls"

    id = Column(Integer, primary_key=True, index=True)
    question = Column(String(200), nullable=False)
    options = Column(JSON, nullable=False)  # Ordered list of option strings
    is_active = Column(Boolean, default=True, nullable=False)

    # Foreign Keys
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    event = relationship("Event", back_populates="polls")
    creator = relationship("User", back_populates="created_polls", foreign_keys=[user_id])
    votes = relationship("PollVote", back_populates="poll", cascade="all, delete-orphan")

    @property
    def total_votes(self) -> int:
        return len(self.votes)

    @property
    def vote_map(self) -> dict:
        """user id -> chosen option"""
        return {vote.user_id: vote.selected_option for vote in self.votes}


class PollVote(Base):
    __tablename__ = "poll_votes"

    id = Column(Integer, primary_key=True, index=True)
    selected_option = Column(String(100), nullable=False)

    # Foreign Keys
    poll_id = Column(
        Integer, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    poll = relationship("Poll", back_populates="votes")
    user = relationship("User", back_populates="poll_votes", foreign_keys=[user_id])

    __table_args__ = (
        UniqueConstraint("poll_id", "user_id", name="uq_poll_vote_user"),
    )
