#!/usr/bin/env python
"""
Run a matrix operation described in a JSON file.

Usage:
    python main.py -i examples/multiply.json
    python main.py -i examples/multiply.json -o result.json
"""

import sys

from matrixops.cli import main

if __name__ == "__main__":
    sys.exit(main())
