"""Seed management API routes.

Provides a centralized endpoint to create/update the active world seed
for the current session and its SavedWorld row.
"""

import hashlib
import random

from flask import Blueprint, jsonify, request, session

from cavernforge import db
from cavernforge.logging_utils import get_logger
from cavernforge.models.saved_world import SavedWorld
from cavernforge.world.api_helpers.cache import active_config, get_cached_world

bp_seed = Blueprint("seed_api", __name__)
_log = get_logger("routes.seed")

SQLITE_MAX_INT = 9223372036854775807


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into bounded 64-bit signed int."""
    if payload_seed is None or isinstance(payload_seed, bool):
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SQLITE_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SQLITE_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SQLITE_MAX_INT
    # Fallback
    return random.randint(1, 1_000_000)


@bp_seed.route("/api/world/seed", methods=["POST"])
def set_seed():
    """Set (or generate) the world seed.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - If seed omitted or null => random seed.
    - If seed provided (int or string) => deterministic hashing.
    - Updates the session's SavedWorld or creates a new one if missing.

    Response: { "seed": <int>, "world_instance_id": <id>, "pos": [x, y] }
    """
    data = request.get_json(silent=True) or {}
    regenerate = data.get("regenerate")
    provided = data.get("seed", None)
    if regenerate and provided is None:
        seed = _coerce_seed(None)
    else:
        seed = _coerce_seed(provided)

    world = get_cached_world(seed, active_config())
    spawn = world.default_spawn()

    instance_id = session.get("world_instance_id")
    instance = None
    if instance_id:
        instance = db.session.get(SavedWorld, instance_id)

    if instance is None:
        instance = SavedWorld(seed=seed, pos_x=spawn.x, pos_y=spawn.y)
        db.session.add(instance)
    else:
        instance.seed = seed
        instance.pos_x, instance.pos_y = spawn.x, spawn.y
    db.session.commit()
    session["world_instance_id"] = instance.id
    _log.info(event="world_seeded", seed=seed, instance_id=instance.id)
    return jsonify({"seed": seed, "world_instance_id": instance.id, "pos": [spawn.x, spawn.y]})
