# matrixops/config.py
"""
Centralized configuration for the matrixops library.
This module provides a single source of truth for all configurable parameters.
"""

import os

import numpy as np

# Element type of every matrix buffer. Arithmetic wraps around on overflow.
DTYPE = np.int32
INT_MIN = int(np.iinfo(DTYPE).min)
INT_MAX = int(np.iinfo(DTYPE).max)

# Display parameters
DISPLAY_WIDTH = 6  # Each element is right-aligned to this many characters

# Parallel multiplication parameters
DEFAULT_MAX_WORKERS = min(32, (os.cpu_count() or 1) + 4)  # Upper bound on worker threads per multiply
ROWS_PER_TASK = 1  # Output rows computed by a single task
