"""Application factory and app-wide configuration."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from investcalc.app.api.routes import api_bp
from investcalc.config import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Install a basic root handler unless the host already configured one."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["MAX_TOTAL_PERIODS"] = settings.max_total_periods

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(
        "%s ready (max_total_periods=%d, cors_origins=%s)",
        settings.app_name,
        settings.max_total_periods,
        settings.cors_origins,
    )
    return app
