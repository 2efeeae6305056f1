from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship, backref
from sqlalchemy.sql import func
from ..database import Base


class ForumPost(Base):
    __tablename__ = "forum_posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=True)
    content = Column(Text, nullable=False)

    # Foreign Keys
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # Replies point at their parent; nesting depth is unbounded
    parent_id = Column(
        Integer,
        ForeignKey("forum_posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    event = relationship("Event", back_populates="forum_posts")
    user = relationship("User", back_populates="forum_posts")
    replies = relationship(
        "ForumPost",
        backref=backref("parent", remote_side=[id]),
        cascade="all, delete-orphan",
        order_by="ForumPost.id",
    )

    @property
    def reply_count(self) -> int:
        return len(self.replies)
