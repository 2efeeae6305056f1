from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    DateTime,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import TicketType


class Ticket(Base):
    """
    A ticket class for an event.

    `sold_quantity` is the sum of quantities held by active registrations.
    It is only ever changed through conditional UPDATE statements issued by
    RegistrationService, so the capacity check and the reservation are a
    single atomic write.
    """

    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    description = Column(String(200))
    price = Column(Numeric(10, 2), nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    sold_quantity = Column(Integer, nullable=False, default=0)
    type = Column(String, nullable=False, default=TicketType.REGULAR.value)

    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    event = relationship("Event", back_populates="tickets")
    registrations = relationship(
        "Registration", back_populates="ticket", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_ticket_price_non_negative"),
        CheckConstraint("quantity >= 1", name="check_ticket_quantity_positive"),
        CheckConstraint("sold_quantity >= 0", name="check_ticket_sold_non_negative"),
        CheckConstraint("sold_quantity <= quantity", name="check_ticket_sold_lte_total"),
    )

    @property
    def available_quantity(self) -> int:
        return self.quantity - self.sold_quantity
