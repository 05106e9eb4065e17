"""Validation utilities and check-in exceptions."""
import re
from typing import Dict, List, Any, Optional

class CheckInError(Exception):
    """Base class for check-in errors."""
    pass

class ConfigurationError(CheckInError):
    """Required inputs or reference data are missing."""
    pass

class ValidationError(CheckInError):
    """Input the kiosk user can correct."""
    pass

class Validator:
    """Validation helper class."""

    @staticmethod
    def digits_only(value: str) -> str:
        """Strip everything except digits."""
        return re.sub(r'\D', '', value or '')

    @staticmethod
    def is_name_search(value: str) -> bool:
        """A search term containing letters is treated as a name."""
        return any(c.isalpha() for c in value or '')

    @staticmethod
    def validate_phone_length(digits: str, minimum: Optional[int], maximum: Optional[int]) -> None:
        """Raise ValidationError if the digit count is out of bounds."""
        if minimum and len(digits) < minimum:
            raise ValidationError(f"Search term must be at least {minimum} digits.")

        if maximum and len(digits) > maximum:
            raise ValidationError(f"Search term must be at most {maximum} digits.")

    @staticmethod
    def parse_id_list(value: str) -> List[int]:
        """Parse a delimited list of integers, ignoring anything else."""
        ids = []
        for part in re.split(r'[\s,;|]+', value or ''):
            if part.isdigit():
                ids.append(int(part))
        return ids

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []

        for field in required_fields:
            if field not in data or not data[field]:
                errors.append(f"{field.title()} is required")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
