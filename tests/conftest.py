import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from cryptforge import create_app  # noqa: E402
from cryptforge.routes.dungeon_api import clear_dungeon_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app(tmp_path_factory):
    app = create_app({"TESTING": True, "CRYPTFORGE_MAX_DIMENSION": 120})
    app.instance_path = str(tmp_path_factory.mktemp("instance"))
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    clear_dungeon_cache()
    return test_app.test_client()
