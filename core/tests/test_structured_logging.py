"""Tests for run/phase correlation logging helpers."""

import io
import logging
import unittest

from core.structured_logging import (
    DETAILED_LOG_FORMAT,
    LOG_FORMAT,
    _RunContextFilter,
    configure_structured_logging,
    get_phase,
    get_run_id,
    log_format_for_verbosity,
    phase_scope,
    set_run_id,
    verbosity_to_log_level,
)


class TestStructuredLogging(unittest.TestCase):
    def test_verbosity_to_log_level(self) -> None:
        self.assertEqual(verbosity_to_log_level(0), logging.WARNING)
        self.assertEqual(verbosity_to_log_level(1), logging.INFO)
        self.assertEqual(verbosity_to_log_level(2), logging.INFO)
        self.assertEqual(verbosity_to_log_level(3), logging.DEBUG)
        self.assertEqual(verbosity_to_log_level(5), logging.DEBUG)

    def test_set_run_id_generates_value(self) -> None:
        run_id = set_run_id()
        self.assertTrue(run_id)
        self.assertEqual(get_run_id(), run_id)

    def test_set_run_id_explicit(self) -> None:
        self.assertEqual(set_run_id("run-42"), "run-42")
        self.assertEqual(get_run_id(), "run-42")

    def test_phase_scope_restores_previous_phase(self) -> None:
        before = get_phase()
        with phase_scope("extract"):
            self.assertEqual(get_phase(), "extract")
            with phase_scope("report"):
                self.assertEqual(get_phase(), "report")
            self.assertEqual(get_phase(), "extract")
        self.assertEqual(get_phase(), before)

    def test_filter_injects_context(self) -> None:
        set_run_id("run-7")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with phase_scope("select"):
            self.assertTrue(_RunContextFilter().filter(record))
        self.assertEqual(record.run_id, "run-7")
        self.assertEqual(record.phase, "select")

    def test_phase_scope_rejects_unknown_phase(self) -> None:
        with self.assertRaises(ValueError):
            with phase_scope("ingest"):
                pass

    def test_log_format_for_verbosity(self) -> None:
        self.assertEqual(log_format_for_verbosity(0), LOG_FORMAT)
        self.assertEqual(log_format_for_verbosity(2), LOG_FORMAT)
        self.assertEqual(log_format_for_verbosity(3), DETAILED_LOG_FORMAT)

    def test_configure_applies_verbosity(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        stream = io.StringIO()
        root.handlers = [logging.StreamHandler(stream)]
        try:
            level = configure_structured_logging(0)
            set_run_id("run-9")
            with phase_scope("report"):
                logging.getLogger("gutendocs.test").info("hidden")
                logging.getLogger("gutendocs.test").warning("Files processed: 2")
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)

        self.assertEqual(level, logging.WARNING)
        self.assertEqual(
            stream.getvalue(),
            "run_id=run-9 | phase=report | WARNING | Files processed: 2\n",
        )


if __name__ == "__main__":
    unittest.main()
