"""Validation utilities for request payloads."""
import math
from typing import Any, Dict, List

from geoattend.utils.errors import ValidationError

class Validator:
    """Validation helper class.

    Every method raises ``ValidationError`` naming the offending field, so
    route handlers can parse a body in a few straight lines.
    """

    @staticmethod
    def require_json(data: Any) -> Dict:
        """Ensure the request body decoded to a JSON object."""
        if not isinstance(data, dict):
            raise ValidationError("Request body must be JSON")
        return data

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> None:
        """Validate required fields in data."""
        for field in required_fields:
            if field not in data or data[field] is None or data[field] == '':
                raise ValidationError(f"Missing required field: {field}", field=field)

    @staticmethod
    def string(data: Dict, field: str) -> str:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} must be a non-empty string", field=field)
        return value.strip()

    @staticmethod
    def coordinate(data: Dict, field: str) -> float:
        """Parse a latitude/longitude. Only numeric parsing, no bounds check."""
        value = data.get(field)
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be a number", field=field)
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be a number", field=field)
        if not math.isfinite(number):
            raise ValidationError(f"{field} must be a finite number", field=field)
        return number

    @staticmethod
    def integer(data: Dict, field: str) -> int:
        value = data.get(field)
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be an integer", field=field)
        if isinstance(value, float):
            if not value.is_integer():
                raise ValidationError(f"{field} must be an integer", field=field)
            return int(value)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be an integer", field=field)

    @staticmethod
    def positive_integer(data: Dict, field: str) -> int:
        number = Validator.integer(data, field)
        if number <= 0:
            raise ValidationError(f"{field} must be a positive integer", field=field)
        return number

    @staticmethod
    def validate_password(password: Any, min_length: int = 6, field: str = 'password') -> str:
        """Validate password strength."""
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required", field=field)
        if len(password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters long", field=field
            )
        if len(password) > 128:
            raise ValidationError("Password is too long", field=field)
        return password
