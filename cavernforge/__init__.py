"""
project: Cavern Forge
module: __init__.py
License: MIT

Flask application and database setup.

The app object and the SQLAlchemy handle are module globals so models and
blueprints can import them directly. Settings come from the environment
(optionally via a `.env` file); without a DATABASE_URL the saved worlds go to
a SQLite file under the `instance/` folder, which also holds the log file.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy

load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _default_database_url(instance_path: str) -> str:
    # pytest runs get their own file so a dev database is never touched
    filename = "worlds_test.db" if os.getenv("PYTEST_CURRENT_TEST") else "worlds.db"
    return f"sqlite:///{(Path(instance_path) / filename).as_posix()}"


def _engine_options(database_url: str) -> dict:
    if not database_url.startswith("sqlite:///"):
        return {}
    # request threads and the test client share one file database
    return {"connect_args": {"timeout": 10, "check_same_thread": False}}


app = Flask(__name__, instance_relative_config=True)
try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only installs still work with an explicit DATABASE_URL
    pass

database_url = os.getenv("DATABASE_URL") or _default_database_url(app.instance_path)
app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    SQLALCHEMY_DATABASE_URI=database_url,
    SQLALCHEMY_TRACK_MODIFICATIONS=False,
    WORLD_ENABLE_GENERATION_METRICS=_env_flag("WORLD_ENABLE_GENERATION_METRICS", "1"),
)

db = SQLAlchemy(app, session_options={"expire_on_commit": False}, engine_options=_engine_options(database_url))

# Blueprints import `app`/`db` from here, so register them last.
from cavernforge.routes.seed_api import bp_seed  # noqa: E402
from cavernforge.routes.world_api import bp_world  # noqa: E402

app.register_blueprint(bp_seed)
app.register_blueprint(bp_world)


def create_app():
    """Return the app with the saved-world tables in place."""
    from cavernforge import models  # noqa: F401

    with app.app_context():
        db.create_all()
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    cause = getattr(e, "original_exception", None) or e
    logging.getLogger("cavernforge").error("Unhandled exception (id=%s)", error_id, exc_info=cause)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
