"""Logger setup and the debug messages emitted by the core."""
from __future__ import annotations

import logging

import pytest

from logging_config import setup_logging
from main import resize
from simulation.settling import try_settle
from tests.conftest import center_of, make_particle


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_to_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "dune.log"
    setup_logging(logging.DEBUG, str(log_file))
    logging.getLogger("simulation.test").debug("hello sand")
    for handler in restore_root_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in text
    assert "simulation.test - DEBUG - hello sand" in text


def test_setup_logging_does_not_duplicate_handlers(restore_root_logger):
    setup_logging(logging.INFO)
    setup_logging(logging.INFO)
    assert len(restore_root_logger.handlers) == 1


def test_resize_is_logged(state, caplog):
    with caplog.at_level(logging.DEBUG, logger="sim_state.initialization"):
        resize(state, 90, 60)
    assert "Reset terrain for viewport 90x60" in caplog.text


def test_overflow_fallback_is_logged(scripted_state, caplog):
    state = scripted_state
    state.columns.set(4, state.height - 1.0)
    state.columns.set(5, state.height + 100.0)
    state.columns.set(6, state.height + 100.0)
    state.rng.values = [0.5, 0.0]
    with caplog.at_level(logging.DEBUG, logger="simulation.settling"):
        try_settle(state, make_particle(x=center_of(state, 5)), 5, lateral_bias=0.0)
    assert "would overflow" in caplog.text
