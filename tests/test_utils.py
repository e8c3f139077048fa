import json
import logging

import pytest

from conftest import SequenceRandom
from particle import Bounds
from simulation import ParticleField
from tunables import Tunables
from utils import field_statistics, load_config, log_throttle_from_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"simulation_parameters": {"gravity": 12}}))
    assert load_config(str(path)) == {"simulation_parameters": {"gravity": 12}}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_setup_logging_creates_console_and_file_handlers(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "snow.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    kinds = sorted(type(h).__name__ for h in root.handlers)
    assert kinds == ["RotatingFileHandler", "StreamHandler"]

    logging.info("first snow")
    for handler in root.handlers:
        handler.flush()
    assert "first snow" in log_file.read_text()


def test_setup_logging_does_not_duplicate_handlers(tmp_path, restore_root_logger):
    config = {"logging": {"log_file": str(tmp_path / "snow.log")}}
    setup_logging(config)
    setup_logging(config)
    assert len(restore_root_logger.handlers) == 2


def test_field_statistics():
    field = ParticleField(2, lambda: Bounds(100, 100), Tunables(), SequenceRandom(0.5))
    first, second = field.particles
    first.x, first.y, first.vx, first.vy = 50.0, 50.0, -2.0, 10.0
    second.x, second.y, second.vx, second.vy = 50.0, 150.0, 4.0, 30.0
    stats = field_statistics(field)
    assert stats['mean_fall_speed'] == pytest.approx(20.0)
    assert stats['mean_drift_speed'] == pytest.approx(3.0)
    assert stats['on_screen_ratio'] == pytest.approx(0.5)


def test_log_throttle_default():
    assert log_throttle_from_config({}) == 600
    assert log_throttle_from_config({'log_throttle_steps': 1}) == 1


@pytest.mark.parametrize("steps", [0, -10, 2.5, "600", True])
def test_log_throttle_must_be_positive_integer(steps):
    with pytest.raises(ValueError):
        log_throttle_from_config({'log_throttle_steps': steps})
