import json
import logging
import logging.handlers

import pytest

from utils import get_section, load_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_get_section():
    config = {"window": {"width": 390}, "particles": None, "storage": [1, 2]}
    assert get_section(config, "window") == {"width": 390}
    assert get_section(config, "particles") == {}
    assert get_section(config, "storage") == {}
    assert get_section(config, "run_control") == {}


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"particles": {"count": 12}}), encoding="utf-8")
    assert load_config(str(path)) == {"particles": {"count": 12}}


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(broken))

    listed = tmp_path / "list.json"
    listed.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(listed))


def test_setup_logging_twice_keeps_two_handlers(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "app.log"
    config = {"logging": {"level": "debug", "log_file": str(log_file)}}
    setup_logging(config)
    setup_logging(config)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert log_file.exists()


def test_setup_logging_tolerates_null_section(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)
    setup_logging({"logging": None})
    assert (tmp_path / "logs" / "lifeportal.log").exists()
