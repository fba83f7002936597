import json
import logging

from cavernforge import app
from cavernforge.logging_utils import get_logger
from cavernforge.server import _configure_logging, prepare_app


def test_configure_logging_is_idempotent(tmp_path, monkeypatch):
    # Redirect instance path to a temp directory to exercise logging setup
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        log_path = prepare_app()
        assert _configure_logging() == log_path
        assert len(root.handlers) == 2
        logging.getLogger("cavernforge.test").info("hello from test")
        for h in root.handlers:
            h.flush()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
    log_file = tmp_path / "app.log"
    assert log_file.exists()
    assert "hello from test" in log_file.read_text()


def test_key_value_lines(capsys, monkeypatch):
    monkeypatch.setenv("CAVERNFORGE_LOG_LEVEL", "debug")
    monkeypatch.delenv("CAVERNFORGE_LOG_JSON", raising=False)
    get_logger("test.kv").debug(event="world_generated", seed=42, note="two words", skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=debug ts=")
    assert "event=world_generated" in out
    assert "seed=42" in out
    assert "note=two_words" in out
    assert "skipped" not in out
    assert "logger=test.kv" in out


def test_json_mode(capsys, monkeypatch):
    monkeypatch.setenv("CAVERNFORGE_LOG_LEVEL", "info")
    monkeypatch.setenv("CAVERNFORGE_LOG_JSON", "1")
    get_logger("test.json").info(event="startup", port=5000)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["event"] == "startup"
    assert rec["port"] == 5000
    assert rec["level"] == "info"


def test_level_filter(capsys, monkeypatch):
    monkeypatch.delenv("CAVERNFORGE_LOG_JSON", raising=False)
    monkeypatch.setenv("CAVERNFORGE_LOG_LEVEL", "error")
    log = get_logger("test.filter")
    log.info(event="quiet")
    log.warn(event="quiet")
    log.error(event="loud")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=loud" in captured.err


def test_bound_fields_repeat_on_every_line(capsys, monkeypatch):
    monkeypatch.setenv("CAVERNFORGE_LOG_LEVEL", "info")
    monkeypatch.delenv("CAVERNFORGE_LOG_JSON", raising=False)
    base = get_logger("test.bind")
    seeded = base.bind(seed=42)
    seeded.info(event="first")
    seeded.info(event="second", seed=7)
    base.info(event="third")
    lines = capsys.readouterr().out.strip().splitlines()
    assert "seed=42" in lines[0]
    assert "seed=7" in lines[1] and "seed=42" not in lines[1]
    assert "seed" not in lines[2]
