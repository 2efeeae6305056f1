from sqlalchemy import (
    Index,
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Boolean,
    Text,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import NotificationAudience, NotificationType


class Notification(Base):
    """
    A message tied to an event.

    `audience` tags the row explicitly: a DIRECT notification is addressed to
    `user_id`, a BROADCAST one is addressed to every attendee of the event and
    carries no user id.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String, nullable=False, default=NotificationType.INFO.value)
    audience = Column(
        String, nullable=False, default=NotificationAudience.DIRECT.value
    )
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)

    # Foreign Keys with proper cascade
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    event = relationship("Event", back_populates="notifications")
    user = relationship("User", back_populates="notifications", foreign_keys=[user_id])

    __table_args__ = (
        CheckConstraint(
            "(audience = 'direct' AND user_id IS NOT NULL) OR "
            "(audience = 'broadcast' AND user_id IS NULL)",
            name="check_notification_audience",
        ),
        Index("idx_notification_user_unread", "user_id", "is_read", "created_at"),
        Index("idx_notification_event_audience", "event_id", "audience"),
    )

    @property
    def is_broadcast(self) -> bool:
        return self.audience == NotificationAudience.BROADCAST.value
