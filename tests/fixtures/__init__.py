"""
Test fixtures package.

Provides a controllable clock and an in-memory storage repository.
"""

from .clock import FrozenClock
from .mock_repositories import FailingObjectStorageRepository, InMemoryObjectStorageRepository

__all__ = [
    "FrozenClock",
    "InMemoryObjectStorageRepository",
    "FailingObjectStorageRepository",
]
