"""Helper functions for the application."""
from datetime import datetime, date
from flask import jsonify
from typing import Any, Callable, Optional

def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    return jsonify({
        'error': True,
        'message': str(error),
        'status_code': status_code
    }), status_code

def success_response(data: Any = None, message: str = "Success"):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }

    if data is not None:
        response['data'] = data

    return jsonify(response)

def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code

def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """ISO format for dates and datetimes, passing None through."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value

def distinct(items, key: Callable = None) -> list:
    """Remove duplicates keeping the first occurrence."""
    seen = set()
    result = []

    for item in items:
        marker = key(item) if key else item
        if marker in seen:
            continue
        seen.add(marker)
        result.append(item)

    return result
