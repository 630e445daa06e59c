"""
Shared pytest fixtures and configuration for the filegate test suite.

This module provides:
- Hypothesis configuration for property-based testing
- A frozen clock and token components wired to it
- An in-memory storage repository
"""

import pytest
from hypothesis import HealthCheck, Phase, settings

from filegate.application.file_access_service import FileAccessService
from filegate.domain.file_access import TokenIssuer, TokenVerifier
from tests.fixtures import FrozenClock, InMemoryObjectStorageRepository

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=300,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


TEST_SECRET = "test-secret-key"


# =============================================================================
# Token Fixtures
# =============================================================================


@pytest.fixture
def secret_key() -> str:
    return TEST_SECRET


@pytest.fixture
def clock() -> FrozenClock:
    """Provide a clock frozen at a fixed instant."""
    return FrozenClock()


@pytest.fixture
def issuer(secret_key, clock) -> TokenIssuer:
    return TokenIssuer(secret_key, clock=clock)


@pytest.fixture
def verifier(secret_key, clock) -> TokenVerifier:
    return TokenVerifier(secret_key, clock=clock)


# =============================================================================
# Storage / Service Fixtures
# =============================================================================


@pytest.fixture
def storage_repository() -> InMemoryObjectStorageRepository:
    """Provide an in-memory storage repository holding one image."""
    repo = InMemoryObjectStorageRepository()
    repo.store("shopizer", "products/m1/sku1/SMALL/img.jpg", b"\xff\xd8jpeg-bytes")
    repo.clear_history()
    return repo


@pytest.fixture
def file_access_service(issuer, verifier, storage_repository) -> FileAccessService:
    return FileAccessService(
        issuer,
        verifier,
        storage_repository,
        default_ttl_seconds=300,
        max_ttl_seconds=3600,
    )


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real filesystem, full app)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
