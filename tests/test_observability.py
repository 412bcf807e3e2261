"""
Unit tests for observability features.
"""

import unittest
import os
import tempfile
import shutil
import sys
import time
import logging

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from matrixops.observability import configure_logging, ExecutionProfiler


class TestObservability(unittest.TestCase):
    """Test cases for observability utilities."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up after each test."""
        logger = logging.getLogger('matrixops')
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        if os.path.exists(self.test_dir):
            shutil.rmtree(self.test_dir)

    def test_logging_configuration(self):
        """Test that logging configuration works."""
        log_file = os.path.join(self.test_dir, "test.log")
        logger = configure_logging(level="DEBUG", log_file=log_file)

        self.assertEqual(logger.name, 'matrixops')
        self.assertFalse(logger.propagate)
        logging.getLogger('matrixops.backend').debug("Test message")
        for handler in logger.handlers:
            handler.flush()

        with open(log_file) as f:
            self.assertIn("Test message", f.read())

    def test_reconfiguring_does_not_duplicate_handlers(self):
        configure_logging(level="INFO")
        logger = configure_logging(level="WARNING")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.WARNING)

    def test_execution_profiler_context_manager(self):
        """Test profiler context manager."""
        profiler = ExecutionProfiler()

        with profiler.profile("operation1", rows=2):
            time.sleep(0.01)

        with profiler.profile("operation2"):
            time.sleep(0.02)

        self.assertEqual([e.name for e in profiler.entries], ["operation1", "operation2"])
        self.assertEqual(profiler.entries[0].metadata, {'rows': 2})
        self.assertGreaterEqual(profiler.entries[0].duration, 0.01)
        self.assertGreaterEqual(profiler.entries[1].duration, 0.02)

    def test_entry_recorded_when_block_raises(self):
        profiler = ExecutionProfiler()
        with self.assertRaises(RuntimeError):
            with profiler.profile("failing"):
                raise RuntimeError("boom")
        self.assertEqual(len(profiler.entries), 1)

    def test_profiler_summary_statistics(self):
        profiler = ExecutionProfiler()
        for _ in range(3):
            with profiler.profile("multiply"):
                pass
        with profiler.profile("write"):
            pass

        summary = profiler.get_summary()
        self.assertEqual(summary['multiply']['count'], 3)
        self.assertEqual(summary['write']['count'], 1)
        self.assertAlmostEqual(summary['multiply']['mean'] * 3, summary['multiply']['total'])

    def test_format_summary_lists_each_section(self):
        profiler = ExecutionProfiler()
        with profiler.profile("load"):
            pass
        with profiler.profile("compute", operator="Multiply"):
            pass

        text = profiler.format_summary()
        self.assertIn("Section", text)
        self.assertIn("load", text)
        self.assertIn("compute", text)

    def test_empty_profiler_summary(self):
        profiler = ExecutionProfiler()
        self.assertEqual(profiler.get_summary(), {})
        self.assertIn("Section", profiler.format_summary())


if __name__ == '__main__':
    unittest.main()
