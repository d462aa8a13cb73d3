"""Unit tests for the logging module."""

import logging
import os
import unittest
from unittest.mock import MagicMock, patch

from binroute.utils.logging import (
    BinrouteLogger,
    Colors,
    LogLevel,
    ProgressTracker,
    SimpleFormatter,
    Symbols,
    log_debug,
    log_detail,
    log_error,
    log_progress,
    log_success,
    log_warning,
    setup_logging,
    suppress_third_party_logs,
)


class TestLogLevel(unittest.TestCase):
    def test_log_levels(self):
        self.assertEqual(LogLevel.QUIET.value, 0)
        self.assertEqual(LogLevel.NORMAL.value, 1)
        self.assertEqual(LogLevel.VERBOSE.value, 2)
        self.assertEqual(LogLevel.DEBUG.value, 3)


class TestSimpleFormatter(unittest.TestCase):
    """Test cases for SimpleFormatter class."""

    def _record(self, level, msg, args=()):
        return logging.LogRecord(
            name="test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=args,
            exc_info=None,
        )

    def test_format_with_colors(self):
        formatted = SimpleFormatter().format(self._record(logging.INFO, "Route ready"))
        self.assertIn(Colors.CYAN, formatted)
        self.assertIn("Route ready", formatted)
        self.assertTrue(formatted.endswith(Colors.RESET))

    def test_format_with_args(self):
        """Message arguments are interpolated before colouring."""
        formatted = SimpleFormatter().format(
            self._record(logging.WARNING, "Bin %s is full", ("#4",))
        )
        self.assertIn(Colors.YELLOW, formatted)
        self.assertIn("Bin #4 is full", formatted)


class TestBinrouteLogger(unittest.TestCase):
    """Test cases for BinrouteLogger class."""

    def setUp(self):
        BinrouteLogger.set_level(LogLevel.NORMAL)
        os.environ.pop("BINROUTE_EFFECTIVE_LOG_LEVEL", None)

    def test_set_and_get_level(self):
        BinrouteLogger.set_level(LogLevel.DEBUG)
        self.assertEqual(BinrouteLogger.get_level(), LogLevel.DEBUG)

        BinrouteLogger.set_level(LogLevel.QUIET)
        self.assertEqual(BinrouteLogger.get_level(), LogLevel.QUIET)

    def test_get_logger_is_cached(self):
        logger = BinrouteLogger.get_logger("test.module")
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(logger.name, "test.module")
        self.assertIs(logger, BinrouteLogger.get_logger("test.module"))

    def test_set_level_reconfigures_existing_loggers(self):
        logger = BinrouteLogger.get_logger("test.reconfigure")
        BinrouteLogger.set_level(LogLevel.QUIET)
        self.assertEqual(logger.level, logging.ERROR)
        BinrouteLogger.set_level(LogLevel.DEBUG)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_environment_variable_override(self):
        os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"] = "DEBUG"
        try:
            logger = BinrouteLogger.get_logger("test.env")
            self.assertEqual(logger.level, logging.DEBUG)
        finally:
            del os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"]

    def test_invalid_environment_value_is_ignored(self):
        os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"] = "chatty"
        try:
            logger = BinrouteLogger.get_logger("test.env.invalid")
            self.assertEqual(logger.level, logging.INFO)
        finally:
            del os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"]

    @patch("logging.Logger.info")
    def test_progress_message(self, mock_info):
        BinrouteLogger.progress("Building graph")

        mock_info.assert_called_once()
        message = mock_info.call_args[0][0]
        self.assertIn("Building graph", message)
        self.assertIn(Symbols.GEAR, message)

    @patch("logging.Logger.info")
    def test_success_message(self, mock_info):
        BinrouteLogger.success("Routes saved")

        message = mock_info.call_args[0][0]
        self.assertIn("Routes saved", message)
        self.assertIn(Colors.GREEN, message)

    @patch("logging.Logger.info")
    def test_quiet_mode_suppresses_progress(self, mock_info):
        BinrouteLogger.set_level(LogLevel.QUIET)
        BinrouteLogger.progress("hidden")
        BinrouteLogger.info("hidden")
        mock_info.assert_not_called()

    @patch("logging.Logger.info")
    def test_detail_message_verbose_only(self, mock_info):
        BinrouteLogger.detail("cluster sizes")
        mock_info.assert_not_called()

        BinrouteLogger.set_level(LogLevel.VERBOSE)
        BinrouteLogger.detail("cluster sizes")
        mock_info.assert_called_once()

    @patch("logging.Logger.debug")
    def test_debug_message_debug_only(self, mock_debug):
        BinrouteLogger.set_level(LogLevel.VERBOSE)
        BinrouteLogger.debug("dp table")
        mock_debug.assert_not_called()

        BinrouteLogger.set_level(LogLevel.DEBUG)
        BinrouteLogger.debug("dp table")
        mock_debug.assert_called_once()

    @patch("logging.Logger.warning")
    def test_warning_message(self, mock_warning):
        BinrouteLogger.warning("No trucks")

        message = mock_warning.call_args[0][0]
        self.assertIn("No trucks", message)
        self.assertIn(Symbols.WARNING, message)

    @patch("logging.Logger.error")
    def test_error_message_even_when_quiet(self, mock_error):
        BinrouteLogger.set_level(LogLevel.QUIET)
        BinrouteLogger.error("Bin file not found")

        mock_error.assert_called_once()
        message = mock_error.call_args[0][0]
        self.assertIn("Bin file not found", message)
        self.assertIn(Symbols.CROSS, message)


class TestLoggingSetup(unittest.TestCase):
    def test_suppress_third_party_logs(self):
        suppress_third_party_logs()
        self.assertEqual(logging.getLogger("urllib3").level, logging.WARNING)
        self.assertEqual(logging.getLogger("asyncio").level, logging.WARNING)

    @patch.dict(os.environ, {}, clear=True)
    def test_setup_logging_default(self):
        setup_logging()
        self.assertEqual(BinrouteLogger.get_level(), LogLevel.NORMAL)
        self.assertEqual(os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"], "NORMAL")

    @patch.dict(os.environ, {"BINROUTE_LOG_LEVEL": "debug"}, clear=True)
    def test_setup_logging_from_env(self):
        setup_logging()
        self.assertEqual(BinrouteLogger.get_level(), LogLevel.DEBUG)

    @patch.dict(os.environ, {"BINROUTE_LOG_LEVEL": "loud"}, clear=True)
    def test_setup_logging_unknown_env_falls_back(self):
        setup_logging()
        self.assertEqual(BinrouteLogger.get_level(), LogLevel.NORMAL)

    @patch.dict(os.environ, {}, clear=True)
    def test_setup_logging_with_explicit_level(self):
        setup_logging(LogLevel.QUIET)
        self.assertEqual(BinrouteLogger.get_level(), LogLevel.QUIET)
        self.assertEqual(logging.getLogger().level, logging.ERROR)

    @patch.dict(os.environ, {}, clear=True)
    def test_setup_logging_lowers_cached_loggers(self):
        setup_logging(LogLevel.QUIET)
        cached = BinrouteLogger.get_logger("binroute.api")
        self.assertEqual(cached.level, logging.ERROR)

        setup_logging(LogLevel.DEBUG)
        self.assertEqual(cached.level, logging.DEBUG)
        self.assertEqual(os.environ["BINROUTE_EFFECTIVE_LOG_LEVEL"], "DEBUG")


class TestProgressTracker(unittest.TestCase):
    def setUp(self):
        BinrouteLogger.set_level(LogLevel.NORMAL)

    @patch("binroute.utils.logging.tqdm")
    def test_normal_mode_creates_bar(self, mock_tqdm):
        tracker = ProgressTracker(["graph", "sequence", "report"])
        mock_tqdm.assert_called_once()
        self.assertEqual(mock_tqdm.call_args.kwargs["total"], 3)
        self.assertIsNotNone(tracker.pbar)

    def test_quiet_mode_has_no_bar(self):
        BinrouteLogger.set_level(LogLevel.QUIET)
        tracker = ProgressTracker(["graph"])
        self.assertIsNone(tracker.pbar)
        tracker.advance("ignored")
        tracker.close()
        self.assertEqual(tracker.current, 0)

    @patch("binroute.utils.logging.tqdm")
    def test_advance(self, mock_tqdm):
        mock_pbar = MagicMock()
        mock_tqdm.return_value = mock_pbar

        tracker = ProgressTracker(["graph"])
        tracker.advance("Graph built", status="success")

        mock_pbar.write.assert_called_once()
        mock_pbar.update.assert_called_once_with(1)
        self.assertEqual(tracker.current, 1)

    @patch("binroute.utils.logging.tqdm")
    def test_advance_without_message(self, mock_tqdm):
        mock_pbar = MagicMock()
        mock_tqdm.return_value = mock_pbar

        ProgressTracker(["graph"]).advance()

        mock_pbar.write.assert_not_called()
        mock_pbar.update.assert_called_once_with(1)

    @patch("binroute.utils.logging.tqdm")
    def test_close(self, mock_tqdm):
        mock_pbar = MagicMock()
        mock_tqdm.return_value = mock_pbar

        ProgressTracker(["graph"]).close()

        self.assertIn("Optimization completed", mock_pbar.write.call_args[0][0])
        mock_pbar.close.assert_called_once()


class TestConvenienceFunctions(unittest.TestCase):
    @patch.object(BinrouteLogger, "progress")
    def test_log_progress(self, mock_progress):
        log_progress("msg")
        mock_progress.assert_called_once_with("msg", Symbols.GEAR)

    @patch.object(BinrouteLogger, "success")
    def test_log_success(self, mock_success):
        log_success("msg")
        mock_success.assert_called_once_with("msg", Symbols.CHECK)

    @patch.object(BinrouteLogger, "detail")
    def test_log_detail(self, mock_detail):
        log_detail("msg")
        mock_detail.assert_called_once_with("msg", "  ")

    @patch.object(BinrouteLogger, "warning")
    def test_log_warning(self, mock_warning):
        log_warning("msg")
        mock_warning.assert_called_once_with("msg", Symbols.WARNING)

    @patch.object(BinrouteLogger, "error")
    def test_log_error(self, mock_error):
        log_error("msg")
        mock_error.assert_called_once_with("msg", Symbols.CROSS)

    @patch.object(BinrouteLogger, "debug")
    def test_log_debug(self, mock_debug):
        log_debug("msg", "binroute.sequence")
        mock_debug.assert_called_once_with("msg", "binroute.sequence")


if __name__ == "__main__":
    unittest.main()
