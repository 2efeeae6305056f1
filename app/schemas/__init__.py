from .common import PaginationInfo, PaginationParams, Page
from .auth import (
    LoginRequest,
    RegisterRequest,
    GoogleLoginRequest,
    ProfileUpdate,
    AuthResponse,
)
from .user import UserSummary, UserResponse, UserUpdate
from .event import EventCreate, EventUpdate, EventSummary, EventResponse
from .ticket import (
    TicketCreate,
    TicketUpdate,
    TicketResponse,
    TicketSummary,
    TicketAvailability,
)
from .registration import (
    RegistrationCreate,
    RegistrationUpdate,
    RegistrationResponse,
    AttendeeResponse,
)
from .payment import PaymentRequest, RefundRequest
from .forum import (
    ForumPostCreate,
    ForumReplyCreate,
    ForumPostUpdate,
    ForumPostResponse,
    ForumThreadResponse,
)
from .poll import PollCreate, PollUpdate, PollVoteCreate, PollResponse, PollResults
from .qa import QuestionCreate, AnswerCreate, QuestionUpdate, QuestionResponse
from .notification import NotificationCreate, NotificationResponse

__all__ = [
    # Common
    "PaginationInfo",
    "PaginationParams",
    "Page",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "GoogleLoginRequest",
    "ProfileUpdate",
    "AuthResponse",
    # Users
    "UserSummary",
    "UserResponse",
    "UserUpdate",
    # Events
    "EventCreate",
    "EventUpdate",
    "EventSummary",
    "EventResponse",
    # Tickets
    "TicketCreate",
    "TicketUpdate",
    "TicketResponse",
    "TicketSummary",
    "TicketAvailability",
    # Registrations
    "RegistrationCreate",
    "RegistrationUpdate",
    "RegistrationResponse",
    "AttendeeResponse",
    # Payments
    "PaymentRequest",
    "RefundRequest",
    # Forums
    "ForumPostCreate",
    "ForumReplyCreate",
    "ForumPostUpdate",
    "ForumPostResponse",
    "ForumThreadResponse",
    # Polls
    "PollCreate",
    "PollUpdate",
    "PollVoteCreate",
    "PollResponse",
    "PollResults",
    # Q&A
    "QuestionCreate",
    "AnswerCreate",
    "QuestionUpdate",
    "QuestionResponse",
    # Notifications
    "NotificationCreate",
    "NotificationResponse",
]
