"""
Utilities for reading evaluation inputs from disk.
"""
import json
import logging
from pathlib import Path
from typing import Any

from utils.exceptions import InputFileNotFoundError, MalformedJSONError

logger = logging.getLogger(__name__)


def load_json(input_path: Path | str) -> Any:
    """
    Load and parse a JSON file.

    Args:
        input_path: Path to JSON file

    Returns:
        Parsed JSON value

    Raises:
        InputFileNotFoundError: If the path is not an existing file
        MalformedJSONError: If the content is not valid JSON
    """
    input_path = Path(input_path).absolute()

    if not input_path.is_file():
        raise InputFileNotFoundError(input_path)

    logger.debug(f"Loading JSON from {input_path}")

    with open(input_path, "r", encoding="utf-8", errors="replace") as f:
        raw = f.read()

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(input_path, str(e)) from e


def load_json_list(input_path: Path | str) -> list:
    """
    Load a JSON file expected to hold an array.

    A top-level value that is not an array is returned as an empty list;
    callers decide whether that is an error.
    """
    data = load_json(input_path)
    if not isinstance(data, list):
        logger.warning(f"Expected a JSON array in {input_path}, got {type(data).__name__}")
        return []
    return data
