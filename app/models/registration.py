from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    DateTime,
    ForeignKey,
    Text,
    Index,
    CheckConstraint,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import RegistrationStatus, ACTIVE_REGISTRATION_STATUSES


class Registration(Base):
    """An attendee's purchase of one ticket class for an event"""

    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(
        String, nullable=False, default=RegistrationStatus.CONFIRMED.value
    )

    # Payment details (payment flow only)
    payment_method = Column(String, nullable=True)
    payment_id = Column(String, nullable=True)
    refund_reason = Column(Text, nullable=True)
    refunded_at = Column(DateTime(timezone=True), nullable=True)

    # Foreign Keys
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    ticket_id = Column(
        Integer, ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    user = relationship("User", back_populates="registrations")
    event = relationship("Event", back_populates="registrations")
    ticket = relationship("Ticket", back_populates="registrations")

    __table_args__ = (
        CheckConstraint(
            "quantity >= 1 AND quantity <= 10", name="check_registration_quantity"
        ),
        # One non-cancelled registration per user per event
        Index(
            "uq_registration_user_event_open",
            "user_id",
            "event_id",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
        Index("idx_registration_ticket_status", "ticket_id", "status"),
    )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_REGISTRATION_STATUSES
