"""
Unit Tests for the Logging Setup
================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import logging
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kinematics_engine.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("kinematics_engine")
    saved_level, saved_handlers = logger.level, list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved_level)
    for handler in saved_handlers:
        logger.addHandler(handler)


class TestSetupLogging:

    def test_returns_package_logger(self, package_logger):
        logger = setup_logging(logging.DEBUG)
        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_repeated_calls_do_not_stack_handlers(self, package_logger):
        setup_logging()
        setup_logging()
        assert len(package_logger.handlers) == 1

    def test_log_file(self, package_logger, tmp_path):
        path = tmp_path / "engine.log"
        logger = setup_logging(logging.INFO, log_file=str(path))
        assert len(logger.handlers) == 2
        logging.getLogger("kinematics_engine.integrator").info("block moved")
        for handler in logger.handlers:
            handler.flush()
        text = path.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "kinematics_engine.integrator - INFO - block moved" in text


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
