# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

import io
import logging
from unittest.mock import patch

from logpct.utils.logging import LogLevel, StructuredLogger, get_logger


class TestStructuredLogger:
    """Test suite for StructuredLogger functionality"""

    def test_initialization(self):
        TEST_LOGGER: str = "test_logger"
        logger = StructuredLogger(name=TEST_LOGGER, level=logging.INFO)
        assert logger.logger.name == TEST_LOGGER
        assert logger.name == TEST_LOGGER

    def test_get_logger_returns_structured_logger(self):
        logger = get_logger("test")
        assert isinstance(logger, StructuredLogger)

    def test_info_with_fields(self):
        logger = StructuredLogger(name="test")

        with patch.object(logger.logger, "info") as mock_info:
            logger.info("Analyzed file", total_lines=3, total_valid=2)

            mock_info.assert_called_once()
            call_args = mock_info.call_args
            assert "Analyzed file" in call_args[0][0]
            assert "total_lines=3" in call_args[0][0]
            assert "total_valid=2" in call_args[0][0]
            assert call_args[1]["extra"] == {"total_lines": 3, "total_valid": 2}

    def test_info_without_fields(self):
        logger = StructuredLogger(name="test")

        with patch.object(logger.logger, "info") as mock_info:
            logger.info("plain")
            mock_info.assert_called_once_with("plain")

    def test_all_levels(self):
        logger = StructuredLogger(name="test")

        for level in LogLevel:
            method = level.name.lower()
            with patch.object(logger.logger, method) as mock_log:
                getattr(logger, method)(f"Test {method} message")
                mock_log.assert_called_once()

    def test_handlers(self):
        logger = StructuredLogger(name="test")

        handler = logging.StreamHandler()
        logger.addHandler(handler)
        assert handler in logger.handlers

        logger.removeHandler(handler)
        assert handler not in logger.handlers

    def test_set_level(self):
        logger = StructuredLogger(name="test", level=logging.INFO)
        assert logger.logger.level == logging.INFO

        logger.setLevel(logging.DEBUG)
        assert logger.logger.level == logging.DEBUG
        assert logger.isEnabledFor(logging.DEBUG)


class TestLoggingIntegration:
    def test_session_logger(self):
        from logpct.analysis.session import logger

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")

        with patch.object(logger, "info") as mock_info:
            logger.info("Test log message")
            mock_info.assert_called_once()

    def test_fields_reach_handler(self):
        logger = StructuredLogger(name="test_capture")
        log_capture = io.StringIO()
        handler = logging.StreamHandler(log_capture)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        logger.addHandler(handler)

        logger.warning("Bucket width rejected", bucket_minutes=0)

        assert "WARNING - Bucket width rejected [bucket_minutes=0]" in log_capture.getvalue()
        logger.removeHandler(handler)
