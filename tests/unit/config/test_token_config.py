"""
Unit tests for token and storage configuration.
"""

import logging
from unittest.mock import patch

import pytest

from filegate.config.storage_config import StorageConfig, create_gcs_client
from filegate.config.token_config import DEFAULT_SECRET, InsecureSecretError, TokenConfig

TOKEN_ENV = (
    "FILE_TOKEN_SECRET",
    "FILE_TOKEN_DEFAULT_TTL_SECONDS",
    "FILE_TOKEN_MAX_TTL_SECONDS",
    "FILE_TOKEN_LEEWAY_SECONDS",
    "FILE_TOKEN_ISSUER_API_KEY",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in TOKEN_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestTokenConfig:
    def test_defaults(self, clean_env):
        config = TokenConfig()

        assert config.secret == DEFAULT_SECRET
        assert config.uses_default_secret
        assert config.default_ttl_seconds == 300
        assert config.max_ttl_seconds == 86400
        assert config.leeway_seconds == 0
        assert config.issuer_api_key is None

    def test_reads_environment(self, clean_env):
        clean_env.setenv("FILE_TOKEN_SECRET", "s3cret")
        clean_env.setenv("FILE_TOKEN_DEFAULT_TTL_SECONDS", "60")
        clean_env.setenv("FILE_TOKEN_MAX_TTL_SECONDS", "600")
        clean_env.setenv("FILE_TOKEN_LEEWAY_SECONDS", "2")
        clean_env.setenv("FILE_TOKEN_ISSUER_API_KEY", "key")

        config = TokenConfig()
        config.validate(is_production=True)

        assert config.secret == "s3cret"
        assert not config.uses_default_secret
        assert (config.default_ttl_seconds, config.max_ttl_seconds) == (60, 600)
        assert config.leeway_seconds == 2
        assert config.issuer_api_key == "key"

    def test_empty_issuer_key_means_unset(self, clean_env):
        clean_env.setenv("FILE_TOKEN_ISSUER_API_KEY", "")
        assert TokenConfig().issuer_api_key is None

    def test_default_secret_refused_in_production(self, clean_env):
        with pytest.raises(InsecureSecretError):
            TokenConfig().validate(is_production=True)

    def test_missing_issuer_key_refused_in_production(self, clean_env):
        clean_env.setenv("FILE_TOKEN_SECRET", "s3cret")
        with pytest.raises(InsecureSecretError, match="FILE_TOKEN_ISSUER_API_KEY"):
            TokenConfig().validate(is_production=True)

    def test_missing_issuer_key_allowed_in_development(self, clean_env):
        clean_env.setenv("FILE_TOKEN_SECRET", "s3cret")
        TokenConfig().validate(is_production=False)

    def test_default_secret_warns_in_development(self, clean_env, caplog):
        with caplog.at_level(logging.WARNING, logger="filegate.config.token_config"):
            TokenConfig().validate(is_production=False)
        assert "insecure default secret" in caplog.text

    @pytest.mark.parametrize(
        "name,value",
        [
            ("FILE_TOKEN_SECRET", ""),
            ("FILE_TOKEN_DEFAULT_TTL_SECONDS", "-1"),
            ("FILE_TOKEN_DEFAULT_TTL_SECONDS", "90000"),
            ("FILE_TOKEN_LEEWAY_SECONDS", "-3"),
        ],
    )
    def test_inconsistent_settings(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ValueError):
            TokenConfig().validate()


class TestStorageConfig:
    def test_defaults(self, monkeypatch):
        for name in ("STORAGE_BACKEND", "LOCAL_STORAGE_DIR", "GCS_PROJECT", "GOOGLE_APPLICATION_CREDENTIALS"):
            monkeypatch.delenv(name, raising=False)

        config = StorageConfig()

        assert config.backend == "local"
        assert config.local_dir == "/tmp/filegate"
        assert config.gcs_project is None
        assert config.credentials_path is None

    @patch("filegate.config.storage_config.storage.Client")
    @patch("filegate.config.storage_config.service_account.Credentials.from_service_account_file")
    def test_gcs_client_uses_service_account_file(self, mock_from_file, mock_client_cls, monkeypatch, tmp_path):
        key_file = tmp_path / "sa.json"
        key_file.write_text("{}")
        monkeypatch.setenv("STORAGE_BACKEND", "gcs")
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(key_file))
        monkeypatch.setenv("GCS_PROJECT", "proj")

        client = create_gcs_client(StorageConfig())

        mock_from_file.assert_called_once_with(str(key_file))
        mock_client_cls.assert_called_once_with(project="proj", credentials=mock_from_file.return_value)
        assert client is mock_client_cls.return_value

    @patch("filegate.config.storage_config.storage.Client")
    def test_gcs_client_falls_back_to_default_credentials(self, mock_client_cls, monkeypatch, tmp_path):
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(tmp_path / "missing.json"))
        monkeypatch.delenv("GCS_PROJECT", raising=False)
        monkeypatch.delenv("STORAGE_BACKEND", raising=False)

        create_gcs_client(StorageConfig())

        mock_client_cls.assert_called_once_with(project=None)
