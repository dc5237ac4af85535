"""
Tests for logging setup.

Run with: pytest tests/test_logging.py -v
"""
import importlib
import logging

import pytest

from boostprep.partitioning import PartitionedDataset
from boostprep.config import PrepConfig
from boostprep.pipeline import sanitize_partitions
from boostprep.records import LabeledPoint
from boostprep.utils import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("boostprep")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler_receives_debug(self, package_logger, tmp_path):
        """Per-partition debug messages reach the log file."""
        log_file = tmp_path / "logs" / "prep.log"
        setup_logging(level=logging.WARNING, log_file=log_file)

        dataset = PartitionedDataset([[LabeledPoint(0.0, 2, None, [0.0, 1.0])]])
        sanitize_partitions(dataset, PrepConfig(missing=0.0))

        for handler in package_logger.handlers:
            handler.flush()
        assert "Partition 0" in log_file.read_text()

    def test_console_only(self, package_logger):
        logger = setup_logging()
        assert logger is package_logger
        streams = [h for h in logger.handlers if type(h) is logging.StreamHandler]
        assert len(streams) == 1

    def test_repeated_setup_does_not_duplicate_handlers(self, package_logger, tmp_path):
        """A second call replaces the console and file handlers of the first."""
        setup_logging(log_file=tmp_path / "first.log")
        logger = setup_logging(log_file=tmp_path / "second.log")

        active = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(active) == 2
        files = [h for h in active if isinstance(h, logging.FileHandler)]
        assert [h.baseFilename for h in files] == [str(tmp_path / "second.log")]

    def test_override_warning_logged(self, package_logger, caplog):
        """Enabling allow_non_zero_missing with a non-zero sentinel logs a warning."""
        from boostprep.sanitization import MissingValueSanitizer

        with caplog.at_level(logging.WARNING, logger="boostprep"):
            MissingValueSanitizer(missing=-1.0, allow_non_zero_missing=True)
        assert "allow_non_zero_missing" in caplog.text


class TestModuleLoggers:
    """Library modules stay silent unless the application configures logging."""

    @pytest.mark.parametrize('module', [
        'boostprep.engine',
        'boostprep.pipeline',
        'boostprep.config.loaders',
        'boostprep.config.serialization',
        'boostprep.partitioning.aligner',
        'boostprep.sanitization.missing',
    ])
    def test_module_logger_has_null_handler(self, module):
        importlib.import_module(module)
        handlers = logging.getLogger(module).handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
