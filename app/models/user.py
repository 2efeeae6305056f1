from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
from .enums import UserRole


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    # Either a local password or a linked Google account (or both)
    password_hash = Column(String, nullable=True)
    google_id = Column(String, unique=True, index=True, nullable=True)

    role = Column(String, nullable=False, default=UserRole.USER.value)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Constraints
    __table_args__ = (
        UniqueConstraint("email", name="uq_user_email"),
        UniqueConstraint("google_id", name="uq_user_google_id"),
    )

    organized_events = relationship(
        "Event",
        back_populates="organizer",
        foreign_keys="Event.organizer_id",
        cascade="all, delete-orphan",
    )
    registrations = relationship(
        "Registration", back_populates="user", cascade="all, delete-orphan"
    )
    forum_posts = relationship(
        "ForumPost", back_populates="user", cascade="all, delete-orphan"
    )
    created_polls = relationship(
        "Poll", back_populates="creator", cascade="all, delete-orphan"
    )
    poll_votes = relationship(
        "PollVote", back_populates="user", cascade="all, delete-orphan"
    )
    asked_questions = relationship(
        "QA",
        back_populates="questioner",
        foreign_keys="QA.user_id",
        cascade="all, delete-orphan",
    )
    answered_questions = relationship(
        "QA", back_populates="answerer", foreign_keys="QA.answerer_id"
    )
    notifications = relationship(
        "Notification", back_populates="user", cascade="all, delete-orphan"
    )

    # Helper methods
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_organizer(self) -> bool:
        """Organizers and admins may manage events"""
        return self.role in (UserRole.ORGANIZER.value, UserRole.ADMIN.value)

    @classmethod
    def find_by_email(cls, db_session, email: str):
        """Find user by email"""
        return db_session.query(cls).filter(cls.email == email).first()

    @classmethod
    def find_by_google_id(cls, db_session, google_id: str):
        """Find user by linked Google account id"""
        return db_session.query(cls).filter(cls.google_id == google_id).first()
