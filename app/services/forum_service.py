from sqlalchemy.orm import Session, selectinload
from typing import List
import logging

from ..models.forum import ForumPost
from ..models.user import User
from ..schemas.common import Page, PaginationParams
from ..schemas.forum import ForumPostCreate, ForumReplyCreate, ForumPostUpdate
from ..utils.authorization import ensure_owner_or_admin, ensure_can_view_event
from ..utils.service_helpers import paginate
from .event_service import get_event_or_raise
from .exceptions import ForumPostNotFoundError

logger = logging.getLogger(__name__)


class ForumService:
    def __init__(self, db: Session):
        self.db = db

    def create_post(self, post_data: ForumPostCreate, author: User) -> ForumPost:
        event = get_event_or_raise(self.db, post_data.event_id)
        ensure_can_view_event(author, event)

        post = ForumPost(
            event_id=event.id,
            user_id=author.id,
            title=post_data.title,
            content=post_data.content,
        )
        return self._save(post)

    def reply(self, parent_id: int, reply_data: ForumReplyCreate, author: User) -> ForumPost:
        """Reply to any post; the reply belongs to the parent's event"""
        parent = self._get_post_or_raise(parent_id)
        ensure_can_view_event(author, parent.event)

        reply = ForumPost(
            event_id=parent.event_id,
            user_id=author.id,
            parent_id=parent.id,
            content=reply_data.content,
        )
        return self._save(reply)

    def get_event_posts(self, event_id: int, viewer, pagination: PaginationParams) -> Page:
        """Top-level posts of an event, newest first"""
        event = get_event_or_raise(self.db, event_id)
        ensure_can_view_event(viewer, event)

        query = (
            self.db.query(ForumPost)
            .options(selectinload(ForumPost.user), selectinload(ForumPost.replies))
            .filter(ForumPost.event_id == event.id, ForumPost.parent_id.is_(None))
            .order_by(ForumPost.created_at.desc(), ForumPost.id.desc())
        )
        return paginate(query, pagination)

    def get_post(self, post_id: int, viewer) -> ForumPost:
        post = self._get_post_or_raise(post_id)
        ensure_can_view_event(viewer, post.event)
        return post

    def update_post(self, post_id: int, updates: ForumPostUpdate, actor: User) -> ForumPost:
        post = self._get_post_or_raise(post_id)
        ensure_owner_or_admin(actor, post.user_id, "You can only edit your own posts")

        for field, value in updates.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(post, field, value)

        return self._save(post)

    def delete_post(self, post_id: int, actor: User) -> bool:
        """Delete a post together with its whole reply tree"""
        post = self._get_post_or_raise(post_id)
        ensure_owner_or_admin(actor, post.user_id, "You can only delete your own posts")

        try:
            self.db.delete(post)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Forum post {post_id} deleted by user {actor.id}")
        return True

    def get_user_posts(self, user: User) -> List[ForumPost]:
        return (
            self.db.query(ForumPost)
            .options(selectinload(ForumPost.event))
            .filter(ForumPost.user_id == user.id)
            .order_by(ForumPost.created_at.desc(), ForumPost.id.desc())
            .all()
        )

    def _get_post_or_raise(self, post_id: int) -> ForumPost:
        post = self.db.query(ForumPost).filter(ForumPost.id == post_id).first()
        if not post:
            raise ForumPostNotFoundError("The specified post does not exist")
        return post

    def _save(self, post: ForumPost) -> ForumPost:
        try:
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)
        except Exception:
            self.db.rollback()
            raise
        return post
