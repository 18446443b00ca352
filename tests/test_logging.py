import logging
import sys

import pytest

from flowfield.logging import LOG_FORMAT, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for h in root.handlers[:]:
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)


def test_stdout_handler_and_level(restore_root_logger):
    handler = setup_logging("debug")
    assert restore_root_logger.level == logging.DEBUG
    assert restore_root_logger.handlers == [handler]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stdout
    assert handler.formatter._fmt == LOG_FORMAT


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("LOUD")
    assert restore_root_logger.level == logging.INFO


def test_reconfigure_keeps_one_handler_and_closes_old(tmp_path, restore_root_logger):
    first = setup_logging("INFO", str(tmp_path / "first.log"))
    assert first.stream is not None

    second = setup_logging("WARNING")

    assert restore_root_logger.handlers == [second]
    # FileHandler.close() drops its stream
    assert first.stream is None


def test_log_file_is_appended(tmp_path):
    path = tmp_path / "flowfield.log"
    path.write_text("earlier run\n")

    handler = setup_logging("INFO", str(path))
    get_logger("flowfield.loop").info("Render loop started")
    handler.flush()

    lines = path.read_text().splitlines()
    assert lines[0] == "earlier run"
    assert "flowfield.loop - INFO - Render loop started" in lines[1]


def test_project_loggers_respect_root_level(tmp_path):
    path = tmp_path / "warn.log"
    handler = setup_logging("WARNING", str(path))

    log = get_logger("flowfield.viewport")
    log.debug("Resolution -> 10x10")
    log.warning("Font not found")
    handler.flush()

    contents = path.read_text()
    assert "Resolution" not in contents
    assert "flowfield.viewport - WARNING - Font not found" in contents


def test_get_logger_is_named():
    assert get_logger("flowfield.app") is logging.getLogger("flowfield.app")
