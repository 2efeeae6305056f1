from sqlalchemy.orm import Session, selectinload
from sqlalchemy import update
from typing import List, Optional
from datetime import datetime, timezone
import logging

from ..models.qa import QA
from ..models.user import User
from ..models.enums import QAStatus
from ..schemas.common import Page, PaginationParams
from ..schemas.qa import QuestionCreate, QuestionUpdate
from ..utils.authorization import (
    ensure_event_manager,
    ensure_owner_or_admin,
    ensure_can_view_event,
)
from ..utils.service_helpers import paginate
from .event_service import get_event_or_raise
from .exceptions import QuestionNotFoundError, BusinessRuleViolationError

logger = logging.getLogger(__name__)


class QAService:
    """Attendee questions and organizer answers.

    pending -> answered and pending -> rejected are the only transitions;
    both end states are final.
    """

    def __init__(self, db: Session):
        self.db = db

    def ask_question(self, question_data: QuestionCreate, asker: User) -> QA:
        event = get_event_or_raise(self.db, question_data.event_id)
        ensure_can_view_event(asker, event)

        qa = QA(
            event_id=event.id,
            user_id=asker.id,
            question=question_data.question.strip(),
            status=QAStatus.PENDING.value,
        )
        try:
            self.db.add(qa)
            self.db.commit()
            self.db.refresh(qa)
        except Exception:
            self.db.rollback()
            raise

        return qa

    def answer_question(self, qa_id: int, answer: str, answerer: User) -> QA:
        qa = self._get_question_or_raise(qa_id)
        ensure_event_manager(
            answerer, qa.event, "Only the event organizer or an admin can answer questions"
        )

        if qa.status != QAStatus.PENDING.value:
            raise BusinessRuleViolationError(
                "Only pending questions can be answered", error="Question closed"
            )

        try:
            # Conditional so a concurrent answer or rejection wins cleanly
            result = self.db.execute(
                update(QA)
                .where(QA.id == qa.id, QA.status == QAStatus.PENDING.value)
                .values(
                    answer=answer,
                    answerer_id=answerer.id,
                    status=QAStatus.ANSWERED.value,
                    answered_at=datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise BusinessRuleViolationError(
                    "Only pending questions can be answered", error="Question closed"
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(qa)
        logger.info(f"Question {qa.id} answered by user {answerer.id}")
        return qa

    def update_question(self, qa_id: int, updates: QuestionUpdate, actor: User) -> QA:
        qa = self._get_question_or_raise(qa_id)
        ensure_owner_or_admin(actor, qa.user_id, "You can only update your own questions")

        if qa.status != QAStatus.PENDING.value:
            raise BusinessRuleViolationError(
                "Answered or rejected questions cannot be changed",
                error="Question closed",
            )

        update_data = updates.model_dump(exclude_unset=True, exclude_none=True)

        new_status = update_data.pop("status", None)
        if new_status is not None and new_status not in (
            QAStatus.PENDING,
            QAStatus.REJECTED,
        ):
            raise BusinessRuleViolationError(
                "Questions can only be answered through the answer endpoint",
                error="Invalid status",
            )

        values = {}
        if "question" in update_data:
            values["question"] = update_data["question"].strip()
        if new_status is not None:
            values["status"] = new_status.value

        if not values:
            return qa

        try:
            # Guarded on pending like answer_question
            result = self.db.execute(
                update(QA)
                .where(QA.id == qa.id, QA.status == QAStatus.PENDING.value)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise BusinessRuleViolationError(
                    "Answered or rejected questions cannot be changed",
                    error="Question closed",
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(qa)
        return qa

    def delete_question(self, qa_id: int, actor: User) -> bool:
        qa = self._get_question_or_raise(qa_id)
        ensure_owner_or_admin(actor, qa.user_id, "You can only delete your own questions")

        try:
            self.db.delete(qa)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return True

    def get_event_questions(
        self,
        event_id: int,
        viewer: Optional[User],
        pagination: PaginationParams,
        status: Optional[str] = None,
    ) -> Page:
        event = get_event_or_raise(self.db, event_id)
        ensure_can_view_event(viewer, event)

        query = (
            self.db.query(QA)
            .options(selectinload(QA.questioner), selectinload(QA.answerer))
            .filter(QA.event_id == event.id)
        )
        if status:
            query = query.filter(QA.status == status)

        query = query.order_by(QA.created_at.desc(), QA.id.desc())
        return paginate(query, pagination)

    def get_question(self, qa_id: int, viewer: Optional[User]) -> QA:
        qa = self._get_question_or_raise(qa_id)
        ensure_can_view_event(viewer, qa.event)
        return qa

    def get_user_questions(self, user: User) -> List[QA]:
        return (
            self.db.query(QA)
            .options(selectinload(QA.answerer))
            .filter(QA.user_id == user.id)
            .order_by(QA.created_at.desc(), QA.id.desc())
            .all()
        )

    def _get_question_or_raise(self, qa_id: int) -> QA:
        qa = self.db.query(QA).filter(QA.id == qa_id).first()
        if not qa:
            raise QuestionNotFoundError("The specified question does not exist")
        return qa
