"""
project: Cryptforge
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

    GET  /api/dungeon/presets    named parameter presets
    POST /api/dungeon/generate   JSON body of parameters (optionally "preset") -> dungeon JSON
    GET  /api/dungeon/ascii      same parameters as query args -> text/plain map

Requests with an explicit seed are served from a small in-process cache; the
cached values are frozen ``Dungeon`` snapshots so sharing them is safe.
"""

import os
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from cryptforge.dungeon import PRESETS, DungeonGenerator, GenerationParams, ParameterError, preset
from cryptforge.logging_utils import get_logger

log = get_logger("cryptforge.api")

bp_dungeon = Blueprint("dungeon", __name__)

# Simple in-process cache normalized-params -> Dungeon. Lock guards concurrent request threads.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # fallback when no app config is available


def _cache_max() -> int:
    try:
        return int(current_app.config.get("CRYPTFORGE_CACHE_SIZE", _DUNGEON_CACHE_MAX))
    except RuntimeError:  # outside an app context
        return _DUNGEON_CACHE_MAX


def _metrics_flag():
    try:
        return current_app.config.get("CRYPTFORGE_ENABLE_GENERATION_METRICS")
    except RuntimeError:
        return None


def clear_dungeon_cache() -> None:
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


def get_cached_dungeon(params: GenerationParams):
    """Generate (or reuse) the dungeon for ``params``.

    Seedless requests are never cached: each one is meant to be a fresh map.
    Set CRYPTFORGE_DISABLE_CACHE=1 to bypass the cache entirely.
    """
    params = params.normalized()
    if params.seed is None or os.environ.get("CRYPTFORGE_DISABLE_CACHE") == "1":
        return DungeonGenerator(params, enable_metrics=_metrics_flag()).generate()
    key = params.cache_key()
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = DungeonGenerator(params, enable_metrics=_metrics_flag()).generate()
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _cache_max():
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def _params_from(data) -> GenerationParams:
    """Preset (default "default") overlaid with request values; raises ParameterError."""
    data = dict(data or {})
    base = preset(str(data.pop("preset", None) or "default"))
    params = GenerationParams.from_mapping(data, base=base)
    limit = current_app.config.get("CRYPTFORGE_MAX_DIMENSION", 200)
    if params.width > limit or params.height > limit:
        raise ParameterError(f"width and height must not exceed {limit}")
    return params


@bp_dungeon.route("/api/dungeon/presets")
def dungeon_presets():
    """Return every named preset as fully populated parameters."""
    return jsonify({name: preset(name).to_dict() for name in PRESETS})


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def dungeon_generate():
    """
    Generate a dungeon from a JSON body.
    Body: { "preset": "cave", "seed": "abc", "width": 40, ... } (all optional)
    Response: the dungeon as JSON (see Dungeon.to_dict)
    """
    data = request.get_json(silent=True)
    if data is not None and not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    try:
        params = _params_from(data)
    except ParameterError as e:
        return jsonify({"error": str(e)}), 400
    dungeon = get_cached_dungeon(params)
    log.info(event="dungeon_generate", seed=dungeon.seed, rooms=len(dungeon.rooms), width=dungeon.width)
    return jsonify(dungeon.to_dict())


@bp_dungeon.route("/api/dungeon/ascii")
def dungeon_ascii():
    """Plain-text map for quick inspection: ``curl '.../api/dungeon/ascii?seed=abc'``."""
    try:
        params = _params_from(request.args.to_dict())
    except ParameterError as e:
        return jsonify({"error": str(e)}), 400
    dungeon = get_cached_dungeon(params)
    resp = Response(dungeon.to_ascii() + "\n", mimetype="text/plain")
    resp.headers["X-Dungeon-Seed"] = str(dungeon.seed)
    return resp
