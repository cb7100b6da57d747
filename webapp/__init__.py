# --------------------------------------------------------------
#  __init__.py (package root)
# --------------------------------------------------------------
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from .config import Config
from .services.logging_config import configure_logging
from .routes.routes import bp as main_bp

__all__ = ["create_app"]


def create_app(
    data_folder: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None
) -> Flask:
    """Factory for the Flask WSGI application.

    Using a *factory* makes unit testing trivial (each test just calls
    ``create_app()``) and prevents module-level side effects.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if data_folder is not None:
        app.config["DATA_FOLDER"] = str(data_folder)
    if overrides:
        app.config.update(overrides)

    # Configure logging early to capture all messages
    configure_logging(app)
    app.logger.info("[INIT] Enabling CORS...")
    CORS(app, origins=app.config["CORS_ORIGINS"])

    app.register_blueprint(main_bp)
    app.logger.info(f"[INIT] Serving forest data from {app.config['DATA_FOLDER']}")
    return app
