"""
Errors raised while building an evaluation report.

Each error also subclasses the builtin raised for the same situation
elsewhere, so ``except FileNotFoundError`` / ``except ValueError`` still work.
"""
from pathlib import Path


class EvaluationError(Exception):
    """Base class for every fatal evaluation condition."""


class InputFileNotFoundError(EvaluationError, FileNotFoundError):
    """A queries, ground truth or results path does not exist."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}")


class MalformedJSONError(EvaluationError, ValueError):
    """A file exists but could not be parsed as JSON."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid JSON in {self.path}: {reason}")


class EmptyInputError(EvaluationError, ValueError):
    """Queries or ground truth contain no items."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"{label} contains no items.")


class LengthMismatchError(EvaluationError, ValueError):
    """Input lengths differ while strict length checking is on."""

    def __init__(self, expected: int, actual: int, system_name: str = None):
        self.expected = expected
        self.actual = actual
        self.system_name = system_name
        if system_name is None:
            message = f"Length mismatch: queries ({expected}) vs ground_truth ({actual})."
        else:
            message = f"Length mismatch for {system_name}: queries ({expected}) vs results ({actual})."
        super().__init__(message)


class MalformedResultsError(EvaluationError, ValueError):
    """A per-system results file is not a JSON array."""

    def __init__(self, system_name: str, path: Path):
        self.system_name = system_name
        self.path = Path(path)
        super().__init__(f"Results file for {system_name} is not an array: {self.path}")


class NoSystemsDiscoveredError(EvaluationError, LookupError):
    """No results_*.json file matched in the search directories."""

    def __init__(self, search_dirs=None):
        self.search_dirs = [Path(d) for d in (search_dirs or [])]
        super().__init__("No results_*.json found in provided inputs. Nothing to evaluate.")
