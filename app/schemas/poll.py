from pydantic import Field, validator
from typing import Dict, List, Optional
from datetime import datetime
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers
from .common import CamelModel


class PollCreate(CamelModel):
    event_id: int
    question: str = Field(..., min_length=5, max_length=200)
    options: List[str] = Field(
        ...,
        min_length=AppConstants.MIN_POLL_OPTIONS,
        max_length=AppConstants.MAX_POLL_OPTIONS,
    )

    @validator("options", each_item=True)
    def option_length(cls, v):
        if not 1 <= len(v.strip()) <= 100:
            raise ValueError("Each option must be between 1 and 100 characters")
        return v

    @validator("options")
    def validate_options(cls, v):
        return ValidationHelpers.normalize_options(v)


class PollUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=5, max_length=200)
    options: Optional[List[str]] = Field(
        None,
        min_length=AppConstants.MIN_POLL_OPTIONS,
        max_length=AppConstants.MAX_POLL_OPTIONS,
    )
    is_active: Optional[bool] = None

    @validator("options")
    def validate_options(cls, v):
        if v is None:
            return v
        for option in v:
            if len(option.strip()) > 100:
                raise ValueError("Each option must be between 1 and 100 characters")
        return ValidationHelpers.normalize_options(v)


class PollVoteCreate(CamelModel):
    selected_option: str = Field(..., min_length=1, max_length=100)


class PollResponse(CamelModel):
    id: int
    event_id: int
    user_id: int
    question: str
    options: List[str]
    is_active: bool
    total_votes: int = 0
    user_vote: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PollResults(CamelModel):
    poll_id: int
    question: str
    total_votes: int
    results: Dict[str, int]
