"""
project: Cryptforge
module: __init__.py
License: MIT

Flask application factory.

The generator itself (``cryptforge.dungeon``) has no web dependencies; this
module only wires the HTTP API around it. Configuration is sourced from
environment variables (optionally via a ``.env`` file) with defaults suitable
for local development.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so CRYPTFORGE_* settings can be supplied without
# exporting shell variables during development.
load_dotenv()


def create_app(config=None):
    """Build a Flask app with the dungeon blueprint registered.

    ``config`` (a mapping) is applied last so tests can override anything.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        CRYPTFORGE_CACHE_SIZE=int(os.getenv("CRYPTFORGE_CACHE_SIZE", "8")),
        CRYPTFORGE_MAX_DIMENSION=int(os.getenv("CRYPTFORGE_MAX_DIMENSION", "200")),
        CRYPTFORGE_ENABLE_GENERATION_METRICS=os.getenv("CRYPTFORGE_ENABLE_GENERATION_METRICS", "1")
        not in ("0", "false", "no", ""),
    )
    if config:
        app.config.update(config)

    from cryptforge.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    # Error handling: log details, return an id the client can quote
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app


__all__ = ["create_app"]
