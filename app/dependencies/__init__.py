# app/dependencies/__init__.py

from .pagination import pagination_params
from .permissions import (
    get_current_user,
    get_optional_user,
    require_organizer,
    require_admin,
)

__all__ = [
    "pagination_params",
    "get_current_user",
    "get_optional_user",
    "require_organizer",
    "require_admin",
]
