# --------------------------------------------------------------
#  logging_config.py
# --------------------------------------------------------------
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from flask import Flask


def _build_handlers(backend_file: Path, level: int) -> List[logging.Handler]:
    backend_handler = RotatingFileHandler(
        backend_file,
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    backend_handler.setLevel(logging.DEBUG)
    backend_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%H:%M:%S",
        )
    )
    return [backend_handler, console_handler]


def configure_logging(app: Flask) -> None:
    """Attach both *file* and *console* handlers to ``app.logger``.

    *   **File handler** - plaintext ``backend.log`` (rotates at 1 MB,
        keeps 3 backups).
    *   **Console handler** - human-readable output for local dev.

    The ``rfvis`` library logger shares the same handlers and stops
    propagating to the root logger.
    """
    log_dir = Path(app.config["LOG_DIR"])
    log_dir.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    backend_file = log_dir / "backend.log"

    rfvis_logger = logging.getLogger("rfvis")

    # Avoid duplicate handlers on reload
    if not any(isinstance(h, RotatingFileHandler) for h in app.logger.handlers):
        app.logger.handlers = _build_handlers(backend_file, level)
    if not any(isinstance(h, RotatingFileHandler) for h in rfvis_logger.handlers):
        for handler in app.logger.handlers:
            rfvis_logger.addHandler(handler)
    app.logger.setLevel(logging.DEBUG)
    app.logger.propagate = False
    rfvis_logger.setLevel(logging.DEBUG)
    rfvis_logger.propagate = False

    app.logger.info(f"Logging configured. Log file: {backend_file}")
