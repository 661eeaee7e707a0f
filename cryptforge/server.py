"""
project: Cryptforge
module: server.py
License: MIT

Runs the dungeon API with Flask's built-in server. Request logging goes
through stdlib ``logging`` into ``<instance>/app.log`` (rotated) and the
console; the generators keep using ``cryptforge.logging_utils``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from cryptforge import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Build the app, route logs to instance/app.log and serve until Ctrl+C."""
    app = create_app()
    log_path = _configure_logging(app)
    print(f"[INFO] Dungeon API on http://{host}:{port} (log: {log_path})")
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Dungeon API stopped")
        sys.exit(0)


def _configure_logging(app):
    """Replace the root logger's handlers with a rotating file and a console stream.

    Returns the log file path. Safe to call more than once.
    """
    os.makedirs(app.instance_path, exist_ok=True)
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
