"""
API Namespaces - Organized endpoint groups
"""

from typing import Optional

from flask import current_app, request, send_file
from flask_restx import Namespace, Resource

from filegate.api.issuer_guard import require_issuer_key
from filegate.api.v1.models import error_response, file_list_response, token_response
from filegate.domain.errors import (
    ErrorCategory,
    InvalidRequestError,
    ObjectNotFoundError,
    ScopeMismatchError,
    StorageBackendError,
    TokenGenerationError,
    TokenRejectedError,
    create_error_response,
)


def _get_file_access_service():
    """Return the FileAccessService attached to the app, or None."""
    return getattr(current_app, "file_access_service", None)


def _service_unavailable():
    return create_error_response(
        ErrorCategory.SYSTEM_ERROR,
        "File access service not initialized",
        status_code=503,
    )


def _required_arg(name: str) -> Optional[str]:
    value = request.args.get(name, "")
    return value if value.strip() else None


# =============================================================================
# File Namespace - Token issuance and token-gated streaming
# =============================================================================

file_ns = Namespace("files", description="Token-gated file access operations")


@file_ns.route("/token")
class FileToken(Resource):
    """Issue file access tokens"""

    @file_ns.doc("issue_file_token", security="issuer_key")
    @file_ns.param("bucket", "Bucket identifier", required=True)
    @file_ns.param("path", "Object path within the bucket", required=True)
    @file_ns.param("ttlSeconds", "Token lifetime in seconds (default 300)", type=int)
    @file_ns.response(200, "Success", token_response)
    @file_ns.response(400, "Bad Request", error_response)
    @file_ns.response(401, "Unauthorized", error_response)
    @file_ns.response(500, "Internal Server Error", error_response)
    @require_issuer_key
    def get(self):
        """
        Issue a signed, time-limited access token for one file

        The token grants read access to exactly the requested bucket/path
        until `expiresAt`.
        """
        service = _get_file_access_service()
        if service is None:
            return _service_unavailable()

        bucket = _required_arg("bucket")
        path = _required_arg("path")
        if bucket is None or path is None:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Missing 'bucket' or 'path' query parameter",
                status_code=400,
            )

        raw_ttl = request.args.get("ttlSeconds")
        ttl_seconds = None
        if raw_ttl not in (None, ""):
            try:
                ttl_seconds = int(raw_ttl)
            except ValueError:
                return create_error_response(
                    ErrorCategory.INVALID_REQUEST,
                    f"ttlSeconds is not an integer: {raw_ttl!r}",
                    status_code=400,
                )

        try:
            issued = service.issue_token(bucket, path, ttl_seconds)
            return issued.to_dict(), 200

        except InvalidRequestError as e:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST, str(e), status_code=400
            )
        except TokenGenerationError as e:
            current_app.logger.error(
                f"[FILES_V1] Error generating token for {bucket}/{path}: {e.original_error!r}"
            )
            return create_error_response(
                ErrorCategory.TOKEN_GENERATION_FAILED, str(e), status_code=500
            )
        except Exception as e:
            current_app.logger.exception(
                f"[FILES_V1] Unexpected error generating token for {bucket}/{path}: {e}"
            )
            return create_error_response(
                ErrorCategory.TOKEN_GENERATION_FAILED,
                "Unexpected error",
                status_code=500,
            )


@file_ns.route("/list")
class FileList(Resource):
    """List files in a bucket"""

    @file_ns.doc("list_files", security="issuer_key")
    @file_ns.param("bucket", "Bucket identifier", required=True)
    @file_ns.param("prefix", "Path prefix filter")
    @file_ns.response(200, "Success", file_list_response)
    @file_ns.response(400, "Bad Request", error_response)
    @file_ns.response(401, "Unauthorized", error_response)
    @file_ns.response(404, "Bucket Not Found", error_response)
    @require_issuer_key
    def get(self):
        """
        List object paths under a prefix

        Guarded like token issuance, since listing reveals what can be requested.
        """
        service = _get_file_access_service()
        if service is None:
            return _service_unavailable()

        bucket = _required_arg("bucket")
        if bucket is None:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Missing 'bucket' query parameter",
                status_code=400,
            )
        prefix = request.args.get("prefix", "")

        try:
            files = service.list_files(bucket, prefix)
            return {"bucket": bucket, "prefix": prefix, "files": files}, 200

        except ObjectNotFoundError as e:
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND, str(e), status_code=404
            )
        except Exception as e:
            current_app.logger.exception(
                f"[FILES_V1] Error listing {bucket}/{prefix}: {e}"
            )
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Error listing files", status_code=500
            )


@file_ns.route("/")
class FileStream(Resource):
    """Stream a file for a valid token"""

    @file_ns.doc("stream_file")
    @file_ns.param("bucket", "Bucket identifier", required=True)
    @file_ns.param("path", "Object path within the bucket", required=True)
    @file_ns.param("token", "File access token", required=True)
    @file_ns.response(200, "File content")
    @file_ns.response(400, "Bad Request", error_response)
    @file_ns.response(401, "Invalid or Expired Token", error_response)
    @file_ns.response(403, "Token Does Not Match Resource", error_response)
    @file_ns.response(404, "File Not Found", error_response)
    @file_ns.response(500, "Internal Server Error", error_response)
    def get(self):
        """
        Stream a stored file using a short-lived token

        Example: GET /api/v1/files/?bucket=shopizer&path=products/m1/sku1/SMALL/img.jpg&token=...
        """
        service = _get_file_access_service()
        if service is None:
            return _service_unavailable()

        bucket = _required_arg("bucket")
        path = _required_arg("path")
        token = request.args.get("token", "")
        if bucket is None or path is None:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Missing 'bucket' or 'path' query parameter",
                status_code=400,
            )

        try:
            download = service.open_file(token, bucket, path)

        except TokenRejectedError as e:
            # One outcome for every cause; the cause is only logged
            current_app.logger.info(
                f"[FILES_V1] Token rejected ({e.reason}) for {bucket}/{path}"
            )
            return create_error_response(
                ErrorCategory.INVALID_TOKEN, str(e), status_code=401
            )
        except ScopeMismatchError as e:
            current_app.logger.warning(f"[FILES_V1] {e}")
            return create_error_response(
                ErrorCategory.SCOPE_MISMATCH, str(e), status_code=403
            )
        except ObjectNotFoundError as e:
            current_app.logger.info(f"[FILES_V1] {e}")
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND, str(e), status_code=404
            )
        except StorageBackendError as e:
            current_app.logger.error(
                f"[FILES_V1] Storage failure for {bucket}/{path}: {e.original_error!r}"
            )
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, str(e), status_code=500
            )
        except Exception as e:
            current_app.logger.exception(
                f"[FILES_V1] Error streaming {bucket}/{path}: {e}"
            )
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Error streaming file", status_code=500
            )

        current_app.logger.info(
            f"[FILES_V1] Streaming {bucket}/{path} as {download.content_type}"
        )
        return send_file(
            download.stream,
            mimetype=download.content_type,
            download_name=download.filename,
        )
