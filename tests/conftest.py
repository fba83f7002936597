import os
import sys
import tempfile

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# The app reads DATABASE_URL on import, so point it at a throwaway file first.
_DB_DIR = tempfile.mkdtemp(prefix="cavernforge-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_DB_DIR}/test.db")

from cavernforge import create_app, db  # noqa: E402
from cavernforge.models.saved_world import SavedWorld  # noqa: E402
from cavernforge.world.api_helpers.cache import clear_world_cache  # noqa: E402
from cavernforge.world.config import WorldConfig  # noqa: E402

SMALL_CONFIG = WorldConfig(width=60, height=40, min_caverns=6, max_caverns=8)


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True, "WORLD_CONFIG": SMALL_CONFIG})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        db.session.remove()
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def small_config():
    return SMALL_CONFIG


@pytest.fixture()
def seeded_client(client):
    """Client whose session already holds a world for seed 1234."""
    resp = client.post("/api/world/seed", json={"seed": 1234})
    assert resp.status_code == 200
    return client


@pytest.fixture()
def saved_world():
    row = SavedWorld(seed=4321, pos_x=0, pos_y=0)
    db.session.add(row)
    db.session.commit()
    return row


@pytest.fixture(autouse=True)
def _fresh_world_cache():
    clear_world_cache()
    yield
    clear_world_cache()

