# --- Purpose: Contains the execution kernels behind Matrix arithmetic. ---

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .core import Matrix
from .config import DTYPE, DEFAULT_MAX_WORKERS, ROWS_PER_TASK
from .errors import ShapeMismatchError

logger = logging.getLogger(__name__)


def _grid(M: Matrix) -> np.ndarray:
    """A (rows, cols) view over the flat buffer of M. Kernels only read through it."""
    return M._data.reshape(M.rows, M.cols)


def _check_same_shape(A: Matrix, B: Matrix, op_name: str):
    if A.shape != B.shape:
        raise ShapeMismatchError(
            f"Matrices must have the same shape for {op_name}: {A.shape} vs {B.shape}."
        )


def add(A: Matrix, B: Matrix) -> Matrix:
    """Elementwise C = A + B with wraparound."""
    _check_same_shape(A, B, "addition")
    return Matrix._wrap(A.rows, A.cols, (A._data + B._data).astype(DTYPE, copy=False))


def subtract(A: Matrix, B: Matrix) -> Matrix:
    """Elementwise C = A - B with wraparound."""
    _check_same_shape(A, B, "subtraction")
    return Matrix._wrap(A.rows, A.cols, (A._data - B._data).astype(DTYPE, copy=False))


def scale(A: Matrix, scalar: int) -> Matrix:
    """Elementwise C = A * scalar with wraparound. The scalar must already fit in DTYPE."""
    return Matrix._wrap(A.rows, A.cols, A._data * DTYPE(scalar))


def _process_row_block(left: np.ndarray, right: np.ndarray, out: np.ndarray, r_start: int, r_end: int):
    """
    Helper function to compute one block of output rows. This is what each thread runs.

    Only out[r_start:r_end] is written, so blocks never overlap.
    """
    out[r_start:r_end] = left[r_start:r_end] @ right
    return r_start, r_end


def multiply(A: Matrix, B: Matrix, max_workers: int | None = None, rows_per_task: int | None = None) -> Matrix:
    """
    Performs the matrix product C = A @ B in parallel, one task per block of output rows.

    The output is split into contiguous blocks of `rows_per_task` rows. Every block is
    submitted to a thread pool that lives only for this call, and the call waits for
    all of them before returning. An exception raised by any task is re-raised here.

    Args:
        A: Left operand, shape (m, k)
        B: Right operand, shape (k, n)
        max_workers: Upper bound on worker threads (default: DEFAULT_MAX_WORKERS)
        rows_per_task: Output rows per task (default: ROWS_PER_TASK)

    Returns:
        A new Matrix of shape (m, n)
    """
    if A.cols != B.rows:
        raise ShapeMismatchError(
            f"Inner dimensions must match for multiplication: {A.shape} @ {B.shape}."
        )
    workers = DEFAULT_MAX_WORKERS if max_workers is None else max_workers
    block = ROWS_PER_TASK if rows_per_task is None else rows_per_task
    if workers < 1:
        raise ValueError("max_workers must be at least 1.")
    if block < 1:
        raise ValueError("rows_per_task must be at least 1.")

    rows, cols = A.rows, B.cols
    out = np.zeros((rows, cols), dtype=DTYPE)
    left, right = _grid(A), _grid(B)

    n_tasks = -(-rows // block)
    logger.debug(f"Multiplying {A.shape} @ {B.shape} with {n_tasks} task(s) on up to {workers} thread(s)")

    # Use a ThreadPoolExecutor to manage a pool of worker threads.
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = []
        for r_start in range(0, rows, block):
            r_end = min(r_start + block, rows)
            futures.append(executor.submit(_process_row_block, left, right, out, r_start, r_end))

        # future.result() waits for the task and re-raises anything it raised.
        for future in futures:
            future.result()

    return Matrix._wrap(rows, cols, out)
