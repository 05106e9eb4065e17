"""Custom decorators for request validation."""
from functools import wraps
from flask import request
from checkin.utils.helpers import error_response
from checkin.utils.validators import Validator

def require_fields(*fields):
    """Decorator to require fields in the JSON body of a request."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True) or {}

            validation = Validator.validate_required_fields(data, list(fields))
            if not validation['is_valid']:
                return error_response(', '.join(validation['errors']), 400)

            return f(*args, **kwargs)
        return decorated_function
    return decorator
