from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, update
from typing import List, Optional
import logging

from ..models.poll import Poll, PollVote
from ..models.user import User
from ..schemas.poll import PollCreate, PollUpdate, PollResponse, PollResults
from ..utils.authorization import (
    ensure_event_manager,
    ensure_owner_or_admin,
    ensure_can_view_event,
)
from ..utils.constants import Messages
from .event_service import get_event_or_raise
from .exceptions import PollNotFoundError, BusinessRuleViolationError, ConflictError

logger = logging.getLogger(__name__)


class PollService:
    def __init__(self, db: Session):
        self.db = db

    def create_poll(self, poll_data: PollCreate, creator: User) -> Poll:
        event = get_event_or_raise(self.db, poll_data.event_id)
        ensure_event_manager(
            creator, event, "You can only create polls for your own events"
        )

        poll = Poll(
            event_id=event.id,
            user_id=creator.id,
            question=poll_data.question,
            options=poll_data.options,
            is_active=True,
        )
        try:
            self.db.add(poll)
            self.db.commit()
            self.db.refresh(poll)
        except Exception:
            self.db.rollback()
            raise

        return poll

    def get_event_polls(self, event_id: int, viewer: Optional[User]) -> List[Poll]:
        event = get_event_or_raise(self.db, event_id)
        ensure_can_view_event(viewer, event)

        return (
            self.db.query(Poll)
            .options(selectinload(Poll.votes))
            .filter(Poll.event_id == event.id)
            .order_by(Poll.created_at.desc(), Poll.id.desc())
            .all()
        )

    def get_poll(self, poll_id: int, viewer: Optional[User]) -> Poll:
        poll = self._get_poll_or_raise(poll_id)
        ensure_can_view_event(viewer, poll.event)
        return poll

    def update_poll(self, poll_id: int, updates: PollUpdate, actor: User) -> Poll:
        poll = self._get_poll_or_raise(poll_id)
        ensure_owner_or_admin(actor, poll.user_id, "You can only update your own polls")

        update_data = updates.model_dump(exclude_unset=True, exclude_none=True)
        new_options = update_data.pop("options", None)

        try:
            if new_options is not None and new_options != list(poll.options):
                self._lock_poll(poll.id)

                # Existing votes reference option strings
                has_votes = select(PollVote.id).where(PollVote.poll_id == poll.id).exists()
                result = self.db.execute(
                    update(Poll)
                    .where(Poll.id == poll.id, ~has_votes)
                    .values(options=new_options)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise BusinessRuleViolationError(
                        "Options cannot be changed after voting has started",
                        error="Poll has votes",
                    )

            for field, value in update_data.items():
                setattr(poll, field, value)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(poll)
        return poll

    def delete_poll(self, poll_id: int, actor: User) -> bool:
        poll = self._get_poll_or_raise(poll_id)
        ensure_owner_or_admin(actor, poll.user_id, "You can only delete your own polls")

        try:
            self.db.delete(poll)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return True

    def vote(self, poll_id: int, selected_option: str, voter: User) -> Poll:
        """Record the voter's single choice"""
        poll = self._get_poll_or_raise(poll_id)
        ensure_can_view_event(voter, poll.event)

        self._check_vote(poll.is_active, poll.options, selected_option)

        if voter.id in poll.vote_map:
            raise ConflictError(
                "You have already voted on this poll", error=Messages.ALREADY_VOTED
            )

        try:
            self.db.add(
                PollVote(poll_id=poll.id, user_id=voter.id, selected_option=selected_option)
            )
            self.db.flush()

            # Options or is_active may have changed since the poll was loaded
            is_active, options = self._lock_poll(poll.id)
            self._check_vote(is_active, options, selected_option)

            self.db.commit()
        except IntegrityError:
            # Concurrent second vote from the same user
            self.db.rollback()
            raise ConflictError(
                "You have already voted on this poll", error=Messages.ALREADY_VOTED
            )
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"User {voter.id} voted on poll {poll.id}")
        self.db.refresh(poll)
        return poll

    def get_results(self, poll_id: int, viewer: Optional[User]) -> PollResults:
        """Vote count per option, in option order"""
        poll = self.get_poll(poll_id, viewer)

        results = {option: 0 for option in poll.options}
        for vote in poll.votes:
            if vote.selected_option in results:
                results[vote.selected_option] += 1

        return PollResults(
            poll_id=poll.id,
            question=poll.question,
            total_votes=sum(results.values()),
            results=results,
        )

    def to_response(self, poll: Poll, viewer: Optional[User]) -> PollResponse:
        response = PollResponse.model_validate(poll)
        if viewer is not None:
            response.user_vote = poll.vote_map.get(viewer.id)
        return response

    def _check_vote(self, is_active: bool, options, selected_option: str) -> None:
        if not is_active:
            raise BusinessRuleViolationError(
                "This poll is no longer accepting votes", error=Messages.POLL_NOT_ACTIVE
            )

        if selected_option not in options:
            raise BusinessRuleViolationError(
                "The selected option is not valid for this poll",
                error=Messages.INVALID_OPTION,
            )

    def _lock_poll(self, poll_id: int):
        """Current (is_active, options), row-locked where the backend supports it"""
        row = self.db.execute(
            select(Poll.is_active, Poll.options)
            .where(Poll.id == poll_id)
            .with_for_update()
        ).one()
        return row.is_active, row.options

    def _get_poll_or_raise(self, poll_id: int) -> Poll:
        poll = self.db.query(Poll).filter(Poll.id == poll_id).first()
        if not poll:
            raise PollNotFoundError("The specified poll does not exist")
        return poll
