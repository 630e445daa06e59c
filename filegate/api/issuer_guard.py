"""
Issuer Guard Decorator

Restricts token issuance to callers holding the issuer API key.
Stands in for the role-based guard that fronts the issuance endpoint.
"""

from functools import wraps

from flask import current_app, request

from filegate.domain.errors import ErrorCategory, create_error_response
from filegate.domain.file_access import constant_time_equals

API_KEY_HEADER = "X-API-Key"


def require_issuer_key(f):
    """
    Decorator requiring the `X-API-Key` header to match the issuer key.

    When no issuer key is configured on the app the guard lets requests
    through. That only happens in development: production startup fails
    without a key, and development logs a warning.

    Usage:
        @require_issuer_key
        def get(self):
            pass
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        expected_key = getattr(current_app, "issuer_api_key", None)
        if not expected_key:
            return f(*args, **kwargs)

        provided_key = request.headers.get(API_KEY_HEADER, "")
        if not constant_time_equals(expected_key, provided_key):
            current_app.logger.warning(
                f"[FILES_V1] Issuer key rejected for {request.remote_addr}"
            )
            return create_error_response(
                ErrorCategory.UNAUTHORIZED,
                "Missing or invalid issuer API key",
                status_code=401,
            )

        return f(*args, **kwargs)

    return decorated_function
