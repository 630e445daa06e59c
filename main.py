"""
main.py

Flask backend issuing and honouring signed file access tokens.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, google-cloud-storage

Notes:
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - FILE_TOKEN_SECRET must be set in production
  - Uses application factory pattern for better testability
"""

import os

from filegate.app_factory import create_app

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)
