# app/routers/__init__.py

# Import all router modules to make them available
from . import auth
from . import users
from . import events
from . import tickets
from . import attendees
from . import forums
from . import polls
from . import qa
from . import notifications
from . import payments

__all__ = [
    "auth",
    "users",
    "events",
    "tickets",
    "attendees",
    "forums",
    "polls",
    "qa",
    "notifications",
    "payments",
]
