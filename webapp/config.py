"""Configuration for the Flask application."""

import os
from pathlib import Path


class Config:
    """Flask configuration."""

    # Flask settings
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

    # CORS settings
    CORS_ORIGINS = "*"

    # Forest data folder, usually overridden by the command line
    DATA_FOLDER = os.environ.get("RFVIS_DATA", "data")

    # Default SVG size
    SVG_WIDTH = 800
    SVG_HEIGHT = 800

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_DIR = Path(os.environ.get("LOG_DIR", "logs"))
