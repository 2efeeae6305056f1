from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import QAStatus


class QA(Base):
    __tablename__ = "qa"

    id = Column(Integer, primary_key=True, index=True)
    question = Column(String(500), nullable=False)
    answer = Column(Text, nullable=True)
    status = Column(String, nullable=False, default=QAStatus.PENDING.value)
    answered_at = Column(DateTime(timezone=True), nullable=True)

    # Foreign Keys
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    answerer_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    event = relationship("Event", back_populates="questions")
    questioner = relationship(
        "User", back_populates="asked_questions", foreign_keys=[user_id]
    )
    answerer = relationship(
        "User", back_populates="answered_questions", foreign_keys=[answerer_id]
    )
