import re
from typing import List

# 24h clock, hour may be one digit
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


class ValidationHelpers:
    @staticmethod
    def validate_time(value: str) -> bool:
        """Validate HH:MM time format"""
        return bool(value) and TIME_PATTERN.match(value) is not None

    @staticmethod
    def normalize_time(value: str) -> str:
        """Zero-pad the hour so times sort lexically ("9:05" -> "09:05")"""
        hours, minutes = value.split(":")
        return f"{int(hours):02d}:{minutes}"

    @staticmethod
    def normalize_options(options: List[str]) -> List[str]:
        """
        Strip poll options and reject blanks and duplicates.

        Raises ValueError so pydantic reports it as a validation failure.
        """
        cleaned = [option.strip() for option in options]

        if any(not option for option in cleaned):
            raise ValueError("Poll options cannot be empty")

        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Poll options must be unique")

        return cleaned

    @staticmethod
    def escape_like(term: str) -> str:
        """Escape LIKE wildcards in a user supplied search term"""
        return re.sub(r"([\\%_])", r"\\\1", term)
