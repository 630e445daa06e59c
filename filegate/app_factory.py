"""
Application Factory

Creates and configures the Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
import os
import time
from typing import Callable, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from filegate.application.file_access_service import FileAccessService
from filegate.config.storage_config import StorageConfig
from filegate.config.token_config import TokenConfig
from filegate.domain.file_access import TokenIssuer, TokenVerifier
from filegate.domain.file_storage import IObjectStorageRepository
from filegate.infrastructure.storage_factory import StorageFactory

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins = os.getenv("CORS_ORIGINS", "*")

        self.token = TokenConfig()
        self.storage = StorageConfig()


def create_app(
    config: Optional[AppConfig] = None,
    storage_repository: Optional[IObjectStorageRepository] = None,
    clock: Callable[[], float] = time.time,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        storage_repository: Storage backend override; built from config if None
        clock: Time source shared by the token issuer and verifier

    Returns:
        Configured Flask application

    Raises:
        InsecureSecretError: If production runs with the default token secret
            or without an issuer API key
    """
    if config is None:
        config = AppConfig()

    _configure_logging(config)
    config.token.validate(is_production=config.is_production)

    app = Flask(__name__)

    CORS(
        app,
        resources={
            r"/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization", "X-API-Key"],
                "expose_headers": ["Content-Type", "Content-Disposition"],
                "max_age": 3600,
            }
        },
    )

    _initialize_services(app, config, storage_repository, clock)
    _register_blueprints(app, config)
    _register_health_endpoint(app)

    return app


def _configure_logging(config: AppConfig) -> None:
    """Configure root logging once from LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _initialize_services(
    app: Flask,
    config: AppConfig,
    storage_repository: Optional[IObjectStorageRepository],
    clock: Callable[[], float],
) -> None:
    """
    Build the token components and application service and attach them to
    the app.

    The issuer and verifier receive the secret explicitly; nothing reads it
    from global state afterwards.

    Args:
        app: Flask application
        config: Application configuration
        storage_repository: Storage backend override
        clock: Time source
    """
    if storage_repository is None:
        storage_repository = StorageFactory.create_storage(config.storage)

    token_config = config.token
    issuer = TokenIssuer(token_config.secret, clock=clock)
    verifier = TokenVerifier(
        token_config.secret, clock=clock, leeway_seconds=token_config.leeway_seconds
    )

    app.storage_repository = storage_repository
    app.file_access_service = FileAccessService(
        issuer,
        verifier,
        storage_repository,
        default_ttl_seconds=token_config.default_ttl_seconds,
        max_ttl_seconds=token_config.max_ttl_seconds,
    )
    app.issuer_api_key = token_config.issuer_api_key

    if not app.issuer_api_key:
        logger.warning(
            "FILE_TOKEN_ISSUER_API_KEY is unset; token issuance is not guarded "
            "(development only)"
        )
    logger.info(
        f"File access service initialized with {type(storage_repository).__name__}"
    )


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
        config: Application configuration
    """
    from filegate.api.v1 import api_v1_bp

    app.register_blueprint(api_v1_bp)

    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of the storage backend.

    Args:
        app: Flask application instance

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "storage": "unknown",
    }

    storage_repository = getattr(app, "storage_repository", None)
    health_check = getattr(storage_repository, "health_check", None)
    if storage_repository is None:
        health_status["storage"] = "unavailable"
        health_status["status"] = "degraded"
    elif health_check is None:
        health_status["storage"] = "available"
    else:
        try:
            if health_check():
                health_status["storage"] = "connected"
            else:
                health_status["storage"] = "disconnected"
                health_status["status"] = "degraded"
        except Exception as e:
            logger.warning(f"Storage health check failed: {e}")
            health_status["storage"] = "error"
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the application and its storage backend.
        """
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code
