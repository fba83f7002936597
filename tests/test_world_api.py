from cavernforge import db
from cavernforge.models.saved_world import SavedWorld
from cavernforge.world.api_helpers.cache import get_cached_world
from cavernforge.world.api_helpers.movement import DELTAS


def _session_world(client, config):
    with client.session_transaction() as sess:
        instance_id = sess["world_instance_id"]
    instance = db.session.get(SavedWorld, instance_id)
    return instance, get_cached_world(instance.seed, config)


def test_set_numeric_seed(client):
    resp = client.post("/api/world/seed", json={"seed": 12345})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["seed"] == 12345
    assert isinstance(data["world_instance_id"], int)
    map_data = client.get("/api/world/map").get_json()
    assert map_data["seed"] == 12345
    assert map_data["player_pos"] == data["pos"]


def test_set_string_seed_is_deterministic(client):
    first = client.post("/api/world/seed", json={"seed": "alpha"}).get_json()["seed"]
    second = client.post("/api/world/seed", json={"seed": "alpha"}).get_json()["seed"]
    assert isinstance(first, int)
    assert first == second
    assert client.post("/api/world/seed", json={"seed": "77"}).get_json()["seed"] == 77


def test_regenerate_picks_a_random_seed(client):
    resp = client.post("/api/world/seed", json={"regenerate": True})
    assert resp.status_code == 200
    assert 1 <= resp.get_json()["seed"] <= 1_000_000


def test_seed_reuses_session_row(client):
    first = client.post("/api/world/seed", json={"seed": 1}).get_json()
    second = client.post("/api/world/seed", json={"seed": 2}).get_json()
    assert first["world_instance_id"] == second["world_instance_id"]


def test_map_payload(seeded_client, small_config):
    data = seeded_client.get("/api/world/map").get_json()
    assert (data["width"], data["height"]) == (small_config.width, small_config.height)
    assert len(data["rows"]) == data["height"]
    x, y = data["player_pos"]
    assert data["rows"][y][x] == "@"
    world = get_cached_world(1234, small_config)
    assert data["hash"] == world.content_hash()
    assert [x, y] == list(world.default_spawn())


def test_routes_without_saved_world_return_404(client):
    assert client.get("/api/world/map").status_code == 404
    assert client.get("/api/world/state").status_code == 404
    assert client.post("/api/world/move", json={"dir": "n"}).status_code == 404
    assert client.get("/api/world/tile?x=1&y=1").status_code == 404


def test_state_lists_walkable_exits(seeded_client, small_config):
    data = seeded_client.get("/api/world/state").get_json()
    x, y = data["pos"]
    world = get_cached_world(1234, small_config)
    expected = [d for d, (dx, dy) in DELTAS.items() if world.can_occupy(x + dx, y + dy)]
    assert data["exits"] == expected
    assert data["desc"].startswith("You are standing on floor.")


def test_move_follows_exit_and_persists(seeded_client, small_config):
    state = seeded_client.get("/api/world/state").get_json()
    assert state["exits"], "spawn tile should have at least one exit"
    direction = state["exits"][0]
    dx, dy = DELTAS[direction]
    moved = seeded_client.post("/api/world/move", json={"dir": direction}).get_json()
    assert moved["pos"] == [state["pos"][0] + dx, state["pos"][1] + dy]
    again = seeded_client.get("/api/world/state").get_json()
    assert again["pos"] == moved["pos"]
    instance, _ = _session_world(seeded_client, small_config)
    assert [instance.pos_x, instance.pos_y] == moved["pos"]


def test_blocked_and_unknown_moves_stay_put(seeded_client, small_config):
    state = seeded_client.get("/api/world/state").get_json()
    x, y = state["pos"]
    world = get_cached_world(1234, small_config)
    for direction in ("up", ""):
        assert seeded_client.post("/api/world/move", json={"dir": direction}).get_json()["pos"] == [x, y]
    # Default spawn has the smallest y, so nothing below it is floor.
    assert not world.can_occupy(x, y - 1)
    assert seeded_client.post("/api/world/move", json={"dir": "s"}).get_json()["pos"] == [x, y]


def test_tile_lookup(seeded_client):
    pos = seeded_client.get("/api/world/state").get_json()["pos"]
    data = seeded_client.get(f"/api/world/tile?x={pos[0]}&y={pos[1]}").get_json()
    assert data == {"x": pos[0], "y": pos[1], "tile": "floor", "walkable": True}
    corner = seeded_client.get("/api/world/tile?x=0&y=0").get_json()
    assert corner["walkable"] is False
    assert corner["tile"] in ("wall", "empty")


def test_tile_lookup_rejects_bad_coordinates(seeded_client):
    assert seeded_client.get("/api/world/tile?x=abc&y=1").status_code == 400
    assert seeded_client.get("/api/world/tile?x=1").status_code == 400
    resp = seeded_client.get("/api/world/tile?x=9999&y=0")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_invalid_saved_position_relocates_to_spawn(seeded_client, small_config):
    instance, world = _session_world(seeded_client, small_config)
    instance.pos_x, instance.pos_y = 0, 0
    db.session.commit()
    data = seeded_client.get("/api/world/map").get_json()
    spawn = world.default_spawn()
    assert data["player_pos"] == [spawn.x, spawn.y]
    db.session.expire_all()
    refreshed = db.session.get(SavedWorld, instance.id)
    assert (refreshed.pos_x, refreshed.pos_y) == (spawn.x, spawn.y)
