"""
Observability utilities for matrixops.

This module provides:
- Logging configuration for the `matrixops` logger hierarchy
- A small execution profiler used by the command line in debug mode
"""

import logging
import time
from contextlib import contextmanager
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field
from collections import defaultdict


# ============================================================================
# Logging Configuration
# ============================================================================

def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure logging for the matrixops package.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs
    """
    log_level = getattr(logging, level.upper())

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    package_logger = logging.getLogger('matrixops')
    package_logger.setLevel(log_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    package_logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(detailed_formatter)
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.DEBUG)

    # Prevent propagation to root logger
    package_logger.propagate = False

    return package_logger


# ============================================================================
# Performance Profiling
# ============================================================================

@dataclass
class ProfileEntry:
    """Single timed section."""
    name: str
    start_time: float
    duration: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def complete(self):
        self.duration = time.perf_counter() - self.start_time


class ExecutionProfiler:
    """
    Records how long named sections of work take.

    Example:
        profiler = ExecutionProfiler()

        with profiler.profile("multiply", shape=(2, 2)):
            result = A @ B

        print(profiler.format_summary())
    """

    def __init__(self):
        self.entries: List[ProfileEntry] = []
        self.aggregated: Dict[str, List[float]] = defaultdict(list)

    @contextmanager
    def profile(self, name: str, **metadata):
        """Times the enclosed block under `name`; the entry is recorded even if the block raises."""
        entry = ProfileEntry(name=name, start_time=time.perf_counter(), metadata=metadata)
        try:
            yield entry
        finally:
            entry.complete()
            self.entries.append(entry)
            self.aggregated[name].append(entry.duration)

    def get_summary(self) -> Dict[str, Dict[str, float]]:
        """Count, total and mean duration per section name."""
        summary = {}
        for name, durations in self.aggregated.items():
            if durations:
                summary[name] = {
                    'count': len(durations),
                    'total': sum(durations),
                    'mean': sum(durations) / len(durations),
                }
        return summary

    def format_summary(self) -> str:
        summary = self.get_summary()
        lines = [
            "=" * 64,
            f"{'Section':<28} {'Count':>8} {'Total (s)':>12} {'Mean (s)':>12}",
            "-" * 64,
        ]
        for name, stats in sorted(summary.items(), key=lambda x: x[1]['total'], reverse=True):
            lines.append(f"{name:<28} {stats['count']:>8} {stats['total']:>12.4f} {stats['mean']:>12.6f}")
        lines.append("=" * 64)
        return "\n".join(lines)
