# --- Purpose: Reads and writes operation descriptions as JSON. ---

import json
import logging

from .operation import Operation

logger = logging.getLogger(__name__)


def loads_operation(text: str) -> Operation:
    """
    Parses an operation description from a JSON string.

    Raises:
        json.JSONDecodeError: if the text is not valid JSON
        DecodeError: if the JSON does not describe an operation
        ConstructionError: if a matrix has the wrong number of elements
    """
    return Operation.from_dict(json.loads(text))


def load_operation(filepath) -> Operation:
    """Reads an operation description from a UTF-8 JSON file; raises UnicodeDecodeError otherwise."""
    logger.info(f"Loading operation from '{filepath}'")
    with open(filepath, 'r', encoding='utf-8') as f:
        return Operation.from_dict(json.load(f))


def dumps_operation(operation: Operation) -> str:
    """Pretty-printed JSON for the operation, including its cached result (null if absent)."""
    return json.dumps(operation.to_dict(), indent=2)


def dump_operation(operation: Operation, filepath):
    """Writes the operation to a JSON file, replacing any existing content."""
    logger.info(f"Writing operation to '{filepath}'")
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(operation.to_dict(), f, indent=2)
