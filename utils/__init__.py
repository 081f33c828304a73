from .logger import setup_logger, get_logger
from .storage import load_json, load_json_list
from .exceptions import (
    EvaluationError,
    InputFileNotFoundError,
    MalformedJSONError,
    EmptyInputError,
    LengthMismatchError,
    MalformedResultsError,
    NoSystemsDiscoveredError,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "load_json",
    "load_json_list",
    "EvaluationError",
    "InputFileNotFoundError",
    "MalformedJSONError",
    "EmptyInputError",
    "LengthMismatchError",
    "MalformedResultsError",
    "NoSystemsDiscoveredError",
]
