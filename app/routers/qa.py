from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.user import User
from ..models.enums import QAStatus
from ..services.qa_service import QAService
from ..schemas.common import PaginationParams
from ..schemas.qa import QuestionCreate, QuestionUpdate, AnswerCreate, QuestionResponse
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.pagination import pagination_params
from ..dependencies.permissions import (
    get_current_user,
    get_optional_user,
    require_organizer,
)

router = APIRouter(tags=["qa"])


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def ask_question(
    question_data: QuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    qa = QAService(db).ask_question(question_data, current_user)

    return RouterResponse.created(
        data={"question": QuestionResponse.model_validate(qa)},
        message="Question submitted successfully",
    )


@router.get("/event/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_questions(
    event_id: int,
    status_filter: Optional[QAStatus] = Query(None, alias="status"),
    pagination: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    page = QAService(db).get_event_questions(
        event_id,
        current_user,
        pagination,
        status_filter.value if status_filter else None,
    )

    return RouterResponse.success(
        data={
            "questions": [QuestionResponse.model_validate(q) for q in page.items],
            "pagination": page.pagination,
        },
        message="Questions retrieved successfully",
    )


@router.get("/my-questions", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_questions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    questions = QAService(db).get_user_questions(current_user)

    return RouterResponse.success(
        data={"questions": [QuestionResponse.model_validate(q) for q in questions]},
        message="Your questions retrieved successfully",
    )


@router.get("/{qa_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_question(
    qa_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    qa = QAService(db).get_question(qa_id, current_user)

    return RouterResponse.success(
        data={"question": QuestionResponse.model_validate(qa)},
        message="Question retrieved successfully",
    )


@router.put("/{qa_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_question(
    qa_id: int,
    question_data: QuestionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    qa = QAService(db).update_question(qa_id, question_data, current_user)

    return RouterResponse.updated(
        data={"question": QuestionResponse.model_validate(qa)},
        message="Question updated successfully",
    )


@router.delete("/{qa_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_question(
    qa_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    QAService(db).delete_question(qa_id, current_user)

    return RouterResponse.deleted(message="Question deleted successfully")


@router.post("/{qa_id}/answer", response_model=Dict[str, Any])
@handle_service_errors
async def answer_question(
    qa_id: int,
    answer_data: AnswerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    """Answer a pending question (event organizer or admin)"""
    qa = QAService(db).answer_question(qa_id, answer_data.answer, current_user)

    return RouterResponse.success(
        data={"question": QuestionResponse.model_validate(qa)},
        message="Question answered successfully",
    )
