from .constants import AppConstants, Messages
from .validation import ValidationHelpers

__all__ = ["AppConstants", "Messages", "ValidationHelpers"]
