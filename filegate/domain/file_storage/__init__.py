"""
File Storage Domain

Storage contract the file streaming path relies on after a token verifies.
"""

from .storage_repository import IObjectStorageRepository

__all__ = ["IObjectStorageRepository"]
