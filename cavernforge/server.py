"""
project: Cavern Forge
module: server.py
License: MIT

Server bootstrap: tables, log handlers, then the Flask development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from cavernforge import app, db

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def prepare_app():
    """Create tables and install log handlers; safe to call more than once."""
    from cavernforge import models  # noqa: F401

    with app.app_context():
        db.create_all()
    return _configure_logging()


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    log_path = prepare_app()
    logging.getLogger("cavernforge").info("Serving worlds on %s:%s (log file %s)", host, port, log_path)
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging() -> str:
    """Route the root logger to instance/app.log (rotating) and the console.

    Existing root handlers are replaced, so repeated calls leave exactly one
    file handler and one console handler. Returns the log file path.
    """
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(app.instance_path, "app.log")
    formatter = logging.Formatter(LOG_FORMAT)

    handlers = [
        RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS),
        logging.StreamHandler(),
    ]
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        handler.setLevel(logging.INFO)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(logging.INFO)
    return log_path
