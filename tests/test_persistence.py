import pytest
from sqlalchemy.exc import SQLAlchemyError

from cavernforge import db
from cavernforge.models.saved_world import SavedWorld
from cavernforge.world.api_helpers.cache import get_cached_world
from cavernforge.world.api_helpers.persistence import (
    SavedState,
    load_saved_state,
    restore_world,
    save_state,
    state_from_row,
)


def test_round_trip_through_database(saved_world):
    assert save_state(saved_world, 3, 4) is True
    db.session.expire_all()
    state = load_saved_state(saved_world.id)
    assert state == SavedState(4321, 3, 4)


@pytest.mark.parametrize("instance_id", [None, "abc", 987654321])
def test_missing_state_reads_as_none(instance_id):
    assert load_saved_state(instance_id) is None


def test_malformed_row_reads_as_none():
    assert state_from_row(None) is None
    assert state_from_row(SavedWorld(seed=5, pos_x=None, pos_y=3)) is None
    assert state_from_row(SavedWorld(seed=5, pos_x="x", pos_y=3)) is None
    assert state_from_row(SavedWorld(seed=5, pos_x="2", pos_y=3)) == SavedState(5, 2, 3)


def test_restore_keeps_valid_position(small_config):
    world = get_cached_world(4321, small_config)
    spawn = world.default_spawn()
    restored, pos = restore_world(SavedState(4321, spawn.x, spawn.y), small_config)
    assert restored is world
    assert pos == spawn


def test_restore_falls_back_to_default_spawn(small_config):
    world, pos = restore_world(SavedState(4321, 0, 0), small_config)
    assert pos == world.default_spawn()
    assert world.can_occupy(*pos)


def test_restore_uses_app_world_config(small_config):
    world, _ = restore_world(SavedState(4321, 0, 0))
    assert world.config == small_config


def test_save_failure_rolls_back(saved_world, monkeypatch):
    calls = []

    def boom():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db.session, "commit", boom)
    monkeypatch.setattr(db.session, "rollback", lambda: calls.append("rollback"))
    assert save_state(saved_world, 9, 9) is False
    assert calls == ["rollback"]
