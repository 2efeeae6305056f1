from .user import User
from .event import Event
from .ticket import Ticket
from .registration import Registration
from .forum import ForumPost
from .poll import Poll, PollVote
from .qa import QA
from .notification import Notification


__all__ = [
    "User",
    "Event",
    "Ticket",
    "Registration",
    "ForumPost",
    "Poll",
    "PollVote",
    "QA",
    "Notification",
]
