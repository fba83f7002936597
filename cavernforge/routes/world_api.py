"""
project: Cavern Forge
module: world_api.py
License: MIT

World map, movement and tile query routes.

Every route works from the SavedWorld row referenced by the session. The
world itself is regenerated from its seed (through the in-process cache);
only the seed and avatar position are ever stored.
"""

from flask import Blueprint, jsonify, request, session

from cavernforge import db
from cavernforge.models.saved_world import SavedWorld
from cavernforge.world.api_helpers.movement import attempt_move, describe_cell_and_exits
from cavernforge.world.api_helpers.persistence import load_saved_state, restore_world, save_state

bp_world = Blueprint("world", __name__)


def _load_session_world():
    """Return (instance, world, pos) for the session, or (None, None, None).

    A stored position that no longer lands on floor is moved to the default
    spawn and persisted so later moves start from a valid tile.
    """
    instance_id = session.get("world_instance_id")
    state = load_saved_state(instance_id)
    if state is None:
        return None, None, None
    instance = db.session.get(SavedWorld, int(instance_id))
    world, pos = restore_world(state)
    if (pos.x, pos.y) != (state.x, state.y):
        save_state(instance, pos.x, pos.y)
    return instance, world, pos


def _no_world():
    return jsonify({"error": "No saved world found"}), 404


@bp_world.route("/api/world/map")
def world_map():
    """
    Return the rendered map and player position for the session's world.
    Response: { seed, width, height, rows: [str], player_pos: [x, y], hash }
    Rows are indexed by y; the avatar is drawn as '@'.
    """
    instance, world, pos = _load_session_world()
    if world is None:
        return _no_world()
    return jsonify(
        {
            "seed": world.seed,
            "width": world.width,
            "height": world.height,
            "rows": world.render(avatar=pos),
            "player_pos": [pos.x, pos.y],
            "hash": world.content_hash(),
        }
    )


@bp_world.route("/api/world/state")
def world_state():
    """Return current cell state (position, description, exits) without moving.
    Response: { 'pos': [x, y], 'desc': str, 'exits': [dir...] }
    """
    instance, world, pos = _load_session_world()
    if world is None:
        return _no_world()
    desc, exits = describe_cell_and_exits(world, pos.x, pos.y)
    return jsonify({"pos": [pos.x, pos.y], "desc": desc, "exits": exits})


@bp_world.route("/api/world/move", methods=["POST"])
def world_move():
    """Move one step in the requested direction.

    Body JSON: { "dir": "n"|"s"|"e"|"w" }. Unknown directions and blocked
    steps leave the position unchanged.
    Response: { 'pos': [x, y], 'desc': str, 'exits': [dir...] }
    """
    instance, world, pos = _load_session_world()
    if world is None:
        return _no_world()
    data = request.get_json(silent=True) or {}
    direction = str(data.get("dir", "")).lower()
    x, y, _moved = attempt_move(world, instance, direction)
    desc, exits = describe_cell_and_exits(world, x, y)
    return jsonify({"pos": [x, y], "desc": desc, "exits": exits})


@bp_world.route("/api/world/tile")
def world_tile():
    """Classify a single tile. Response: { x, y, tile, walkable }."""
    instance, world, pos = _load_session_world()
    if world is None:
        return _no_world()
    try:
        x = int(request.args.get("x", ""))
        y = int(request.args.get("y", ""))
        tile = world.classify(x, y)
    except ValueError:
        return jsonify({"error": "x and y must be integers"}), 400
    except IndexError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"x": x, "y": y, "tile": tile.value, "walkable": world.can_occupy(x, y)})
