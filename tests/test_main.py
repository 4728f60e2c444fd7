"""Tests for application wiring helpers."""
import sys

from loguru import logger

from deploy_window.main import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sink_includes_module(self, capsys):
        try:
            setup_logging("DEBUG")
            logger.bind(module="store").info("store ready")
            logger.info("plain message")
            logger.debug("debug message")

            err = capsys.readouterr().err
            assert "store - store ready" in err
            assert "app - plain message" in err
            assert "debug message" in err
        finally:
            logger.remove()
            logger.add(sys.stderr)

    def test_level_filters(self, capsys):
        try:
            setup_logging("WARNING")
            logger.bind(module="store").info("quiet")
            logger.bind(module="store").warning("loud")

            err = capsys.readouterr().err
            assert "quiet" not in err
            assert "store - loud" in err
        finally:
            logger.remove()
            logger.add(sys.stderr)
