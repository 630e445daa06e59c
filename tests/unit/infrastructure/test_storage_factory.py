import pytest
from unittest.mock import patch

from filegate.config.storage_config import StorageConfig
from filegate.infrastructure.local_object_storage_repository import LocalObjectStorageRepository
from filegate.infrastructure.storage_factory import StorageFactory


@pytest.fixture
def storage_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LOCAL_STORAGE_DIR", str(tmp_path / "objects"))
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    return monkeypatch


@pytest.mark.unit
class TestStorageFactory:
    def test_local_is_default(self, storage_env, tmp_path):
        storage_env.delenv("STORAGE_BACKEND", raising=False)

        storage = StorageFactory.create_storage()

        assert isinstance(storage, LocalObjectStorageRepository)
        assert storage.base_path == (tmp_path / "objects").resolve()
        assert storage.base_path.is_dir()

    @patch("filegate.infrastructure.storage_factory.create_gcs_client")
    def test_gcs_backend(self, mock_create_client, storage_env):
        """Verify STORAGE_BACKEND=gcs builds the GCS adapter around the configured client."""
        from filegate.infrastructure.gcs_object_storage_repository import (
            GCSObjectStorageRepository,
        )

        storage_env.setenv("STORAGE_BACKEND", "GCS")

        storage = StorageFactory.create_storage()

        assert isinstance(storage, GCSObjectStorageRepository)
        assert storage.client is mock_create_client.return_value

    @patch("filegate.infrastructure.storage_factory.create_gcs_client")
    def test_gcs_failure_is_runtime_error(self, mock_create_client, storage_env):
        storage_env.setenv("STORAGE_BACKEND", "gcs")
        mock_create_client.side_effect = Exception("no credentials")

        with pytest.raises(RuntimeError, match="GCS"):
            StorageFactory.create_storage()

    def test_local_failure_is_runtime_error(self, storage_env, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        storage_env.setenv("STORAGE_BACKEND", "local")
        storage_env.setenv("LOCAL_STORAGE_DIR", str(blocker / "objects"))

        with pytest.raises(RuntimeError, match="local storage"):
            StorageFactory.create_storage()

    def test_unknown_backend_rejected(self, storage_env):
        storage_env.setenv("STORAGE_BACKEND", "s3")

        with pytest.raises(ValueError, match="Unsupported STORAGE_BACKEND"):
            StorageConfig()
