import importlib.util
import json
import os

import pytest

import run
from cavernforge.world import World, WorldConfig

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture()
def small_env(monkeypatch):
    monkeypatch.setenv("WORLD_WIDTH", "60")
    monkeypatch.setenv("WORLD_HEIGHT", "40")
    monkeypatch.setenv("WORLD_MIN_CAVERNS", "6")
    monkeypatch.setenv("WORLD_MAX_CAVERNS", "8")


def _load_script(name):
    path = os.path.join(ROOT_DIR, "scripts", f"{name}.py")
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_generate_hash(small_env, capsys):
    assert run.main(["generate", "42", "--hash"]) == 0
    expected = World(seed=42, config=WorldConfig.from_env()).content_hash()
    assert capsys.readouterr().out.strip() == expected


def test_generate_with_avatar(small_env, capsys):
    assert run.main(["generate", "7", "--avatar"]) == 0
    rows = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(rows) == 40
    assert "".join(rows).count("@") == 1


def test_generate_rejects_bad_config(monkeypatch, capsys):
    monkeypatch.setenv("WORLD_WIDTH", "3")
    assert run.main(["generate", "1"]) == 2
    assert "at least 7x7" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit):
        run.parse_args(["--version"])
    assert run.__version__ in capsys.readouterr().out


def test_diagnose_seeds_reports_clean_worlds(small_env, capsys):
    diagnose = _load_script("diagnose_seeds")
    assert diagnose.main(["1", "2"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in report["results"]] == [1, 2]
    assert all(r["ok"] for r in report["results"])


def test_bare_invocation_defaults_to_server():
    args = run.parse_args([])
    assert args.command == "server"
    assert args.handler is run._run_server
    args = run.parse_args(["--env-file", "missing.env"])
    assert args.handler is run._run_server
    assert args.host is None and args.debug is False
