"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import fields

from filegate.api.v1 import api

# =============================================================================
# Response Models
# =============================================================================

token_response = api.model(
    "TokenResponse",
    {
        "token": fields.String(
            description="Signed file access token",
            example="c2hvcGl6ZXJ8cHJvZHVjdHMlMkZpbWcuanBnfDE3MDAwMDAzMDA.3q2-7w",
        ),
        "expiresAt": fields.Integer(
            description="Token expiry in epoch seconds (valid through this second)"
        ),
    },
)

file_list_response = api.model(
    "FileListResponse",
    {
        "bucket": fields.String(description="Bucket identifier"),
        "prefix": fields.String(description="Path prefix that was listed"),
        "files": fields.List(fields.String, description="Object paths"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested next step"),
    },
)