"""Application layer: orchestration of token issuance and file streaming."""

from .file_access_service import FileAccessService, FileDownload, guess_content_type

__all__ = ["FileAccessService", "FileDownload", "guess_content_type"]
