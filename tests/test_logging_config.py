"""Tests for package logging setup."""

import logging

import pytest


@pytest.fixture
def package_logger():
    """Package logger restored to its unconfigured state afterwards."""
    logger = logging.getLogger("raysketch")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_sets_level(self, package_logger):
        from raysketch.logging_config import setup_logging

        logger = setup_logging(level="debug")

        assert logger is package_logger
        assert logger.level == logging.DEBUG

    def test_unknown_level(self, package_logger):
        from raysketch.logging_config import setup_logging

        with pytest.raises(ValueError, match="Unknown logging level"):
            setup_logging(level="LOUD")

    def test_repeated_calls_do_not_duplicate_handlers(self, package_logger):
        from raysketch.logging_config import setup_logging

        setup_logging()
        setup_logging()

        assert len(package_logger.handlers) == 1

    def test_log_file(self, package_logger, tmp_path):
        from raysketch.logging_config import setup_logging

        log_file = tmp_path / "trace.log"
        logger = setup_logging(level="INFO", log_file=str(log_file))
        logging.getLogger("raysketch.scene.manager").info("Traced %d rays", 3)
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        text = log_file.read_text()
        assert "raysketch.scene.manager - INFO - Traced 3 rays" in text

    def test_scene_run_is_logged(self, package_logger, caplog):
        from raysketch.core.vector import Vector
        from raysketch.emitters import DirectionalEmitter
        from raysketch.scene.manager import SceneManager

        scene = SceneManager(100, 100)
        scene.set_bounding_box()
        scene.add_emitter(DirectionalEmitter(Vector(50, 50), Vector(1, 0)))

        with caplog.at_level(logging.INFO, logger="raysketch"):
            scene.run()

        assert "Traced 1 rays from 1 emitters" in caplog.text
