from pydantic import Field, validator
from typing import Optional
from datetime import datetime
from ..models.enums import QAStatus
from .common import CamelModel
from .user import UserSummary


class QuestionCreate(CamelModel):
    event_id: int
    question: str = Field(..., min_length=5, max_length=500)


class AnswerCreate(CamelModel):
    answer: str = Field(..., min_length=1, max_length=2000)

    @validator("answer")
    def answer_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Answer cannot be empty")
        return v.strip()


class QuestionUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=5, max_length=500)
    status: Optional[QAStatus] = None


class QuestionResponse(CamelModel):
    id: int
    event_id: int
    user_id: int
    question: str
    answer: Optional[str] = None
    status: QAStatus
    answerer_id: Optional[int] = None
    answered_at: Optional[datetime] = None
    questioner: Optional[UserSummary] = None
    answerer: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
