"""
Tests for the logging configuration module.

This test suite validates:
- setup_logging handler configuration
- Context-aware logging
"""
import logging
import os
import sys
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from turkmorf.logging_config import log_with_context, setup_logging


class TestSetupLogging(unittest.TestCase):
    """Test suite for the setup_logging() function."""

    def setUp(self):
        """Clear root logger handlers before each test."""
        self._clear_handlers()
        with tempfile.NamedTemporaryFile(delete=False) as tmp_file:
            self.log_file = tmp_file.name

    def tearDown(self):
        """Clean up handlers and the log file after each test."""
        self._clear_handlers()
        if os.path.exists(self.log_file):
            os.remove(self.log_file)

    @staticmethod
    def _clear_handlers():
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

    def test_console_only_by_default(self):
        """Tests that no file handler is created without a log file."""
        setup_logging()

        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertNotIsInstance(handlers[0], logging.FileHandler)
        self.assertIs(handlers[0].stream, sys.stderr)

    def test_creates_file_handler(self):
        """Tests that setup_logging adds a file handler when given a path."""
        setup_logging(log_file=self.log_file)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        self.assertEqual(len(file_handlers), 1)

    def test_sets_info_level_by_default(self):
        setup_logging()
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_honours_explicit_level(self):
        setup_logging(level=logging.WARNING)
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_debug_overrides_level(self):
        setup_logging(level=logging.WARNING, debug=True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_uses_enhanced_format_in_debug_mode(self):
        """Tests that debug mode adds source locations to every handler."""
        setup_logging(log_file=self.log_file, debug=True)

        for handler in logging.getLogger().handlers:
            format_string = handler.formatter._fmt
            self.assertIn("%(filename)s", format_string)
            self.assertIn("%(lineno)d", format_string)

    def test_uses_simple_format_in_normal_mode(self):
        setup_logging(log_file=self.log_file, debug=False)

        for handler in logging.getLogger().handlers:
            format_string = handler.formatter._fmt
            self.assertNotIn("%(filename)s", format_string)

    def test_writes_run_separator_to_log_file(self):
        setup_logging(log_file=self.log_file)
        logging.getLogger().handlers[-1].flush()

        with open(self.log_file, 'r', encoding='utf-8') as f:
            log_content = f.read()

        self.assertIn("=" * 80, log_content)
        self.assertIn("NEW RUN STARTED", log_content)

    def test_clears_existing_handlers(self):
        """Tests that calling setup_logging twice does not duplicate handlers."""
        logging.getLogger().addHandler(logging.StreamHandler())

        setup_logging(log_file=self.log_file)
        setup_logging(log_file=self.log_file)

        self.assertEqual(len(logging.getLogger().handlers), 2)


class TestLogWithContext(unittest.TestCase):
    """Test suite for the log_with_context() function."""

    def test_logs_main_message(self):
        mock_logger = MagicMock()

        log_with_context("Parsed 'kitap'", level=logging.INFO, logger=mock_logger)

        mock_logger.log.assert_called_once_with(logging.INFO, "Parsed 'kitap'")

    @patch('turkmorf.logging_config.logging.getLogger')
    def test_defaults_to_root_logger(self, mock_get_logger):
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        log_with_context("Graph warmed up")

        mock_get_logger.assert_called_once_with()
        mock_logger.log.assert_called_once_with(logging.DEBUG, "Graph warmed up")

    def test_logs_context_when_debug_enabled(self):
        mock_logger = MagicMock()
        mock_logger.isEnabledFor.return_value = True

        log_with_context("Parsed 'kitabım'", context={"seeds": ["kitab"], "results": 1}, logger=mock_logger)

        all_debug_messages = " ".join(str(call) for call in mock_logger.debug.call_args_list)
        self.assertIn("seeds", all_debug_messages)
        self.assertIn("kitab", all_debug_messages)
        self.assertIn("results", all_debug_messages)

    def test_skips_context_when_debug_disabled(self):
        mock_logger = MagicMock()
        mock_logger.isEnabledFor.return_value = False

        log_with_context("Parsed 'kitap'", context={"seeds": ["kitap"]}, level=logging.INFO, logger=mock_logger)

        mock_logger.log.assert_called_once()
        mock_logger.debug.assert_not_called()

    def test_truncates_long_values(self):
        mock_logger = MagicMock()
        mock_logger.isEnabledFor.return_value = True

        log_with_context("Big", context={"results": "x" * 500}, logger=mock_logger)

        message = mock_logger.debug.call_args[0][0]
        self.assertTrue(message.endswith("..."))
        self.assertLess(len(message), 250)


if __name__ == '__main__':
    unittest.main()
