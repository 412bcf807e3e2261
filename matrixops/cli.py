"""
Command line front end: load an operation from JSON, compute it, and either
print the report or write the computed operation back out as JSON.

Example:
    matrixops -i examples/multiply.json
    matrixops -i examples/multiply.json -o result.json --debug
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .codec import load_operation, dump_operation
from .errors import MatrixError
from .observability import configure_logging, ExecutionProfiler

logger = logging.getLogger(__name__)


@dataclass
class Arguments:
    """The processed command line arguments."""
    debug: bool
    input: Path
    out: Optional[Path] = None

    def __str__(self):
        return f"Debug: {self.debug}\nInput: {self.input}\nOut: {self.out}\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrixops",
        description="Sample Linear Algebra Operations."
    )
    parser.add_argument(
        '-d', '--debug',
        action='store_true',
        help='Activate debug mode'
    )
    parser.add_argument(
        '-i', '--in-file',
        type=str,
        required=True,
        help='Input JSON file'
    )
    parser.add_argument(
        '-o', '--out-file',
        type=str,
        default='',
        help='Output JSON file (default: print the result)'
    )
    return parser


def process(opt: argparse.Namespace) -> Arguments:
    """Converts parsed options to Arguments; an empty output path means no output file."""
    out = Path(opt.out_file) if opt.out_file else None
    return Arguments(debug=opt.debug, input=Path(opt.in_file), out=out)


def process_args(argv=None) -> Arguments:
    return process(build_parser().parse_args(argv))


def main(argv=None) -> int:
    """Runs the program and returns the process exit status."""
    args = process_args(argv)
    configure_logging("DEBUG" if args.debug else "WARNING")
    if args.debug:
        print(args, file=sys.stderr)

    profiler = ExecutionProfiler()

    try:
        with profiler.profile("load"):
            op = load_operation(args.input)
    except OSError as e:
        logger.debug("Could not open input", exc_info=True)
        print(f"need a valid file. {e}", file=sys.stderr)
        return 1
    except (json.JSONDecodeError, UnicodeDecodeError, MatrixError) as e:
        logger.debug("Could not decode input", exc_info=True)
        print(f"invalid json. {e}", file=sys.stderr)
        return 1

    try:
        with profiler.profile("compute", operator=op.operator.value):
            op.compute_and_store()
    except MatrixError as e:
        logger.debug("Operation failed", exc_info=True)
        print(f"invalid operation. {e}", file=sys.stderr)
        return 1

    if args.out is None:
        print(op)
    else:
        try:
            with profiler.profile("write"):
                dump_operation(op, args.out)
        except OSError as e:
            print(f"Unable to write to file. {e}", file=sys.stderr)
            return 1

    if args.debug:
        print(profiler.format_summary(), file=sys.stderr)
    return 0
