"""
Discovery of per-system result files.

A system named ``X`` is represented by a file ``results_X.json`` in one of
the search directories.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from config import EVALUATION_CONFIG, resolve_input_path

logger = logging.getLogger(__name__)

RESULTS_FILE_RE = re.compile(EVALUATION_CONFIG["results_pattern"], re.IGNORECASE)


@dataclass(frozen=True)
class DiscoveredSystem:
    """A system name and the absolute path of its results file."""
    system_name: str
    file_path: Path


def extract_system_name(filename: str) -> Optional[str]:
    """Get the system name from a results file name, or None if it does not match."""
    match = RESULTS_FILE_RE.match(filename)
    if not match:
        return None
    return match.group(1)


def _char_class(char: str) -> int:
    """Punctuation, spaces and symbols sort before digits, digits before letters."""
    category = unicodedata.category(char)
    if category[0] in ("P", "Z", "S", "C"):
        return 0
    if category[0] == "N":
        return 1
    return 2


def system_sort_key(system_name: str):
    """
    Collation key following Unicode root collation order.

    Compared level by level: base characters (accents and case removed),
    then accents, then case with lowercase first. The verbatim name breaks
    any remaining tie.
    """
    base_chars = []
    accents = []
    cases = []
    for char in system_name:
        decomposed = unicodedata.normalize("NFD", char)
        base = "".join(c for c in decomposed if not unicodedata.combining(c))
        marks = "".join(c for c in decomposed if unicodedata.combining(c))
        for folded in base.casefold():
            base_chars.append((_char_class(folded), folded))
        accents.append(marks)
        cases.append(0 if base == base.lower() else 1)
    return (base_chars, accents, cases, system_name)


def parse_csv_option(value: Optional[str]) -> List[str]:
    """Split a comma-separated CLI value, trimming and dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_search_dirs(value: Optional[str]) -> List[Path]:
    """
    Parse the --inputs option into absolute directories.

    Defaults to the current directory when nothing is given.
    """
    dirs = parse_csv_option(value) or [EVALUATION_CONFIG["default_inputs"]]
    return [resolve_input_path(d) for d in dirs]


def parse_system_filter(value: Optional[str]) -> Optional[List[str]]:
    """Parse the --systems option; None means accept every system."""
    names = parse_csv_option(value)
    return names or None


def discover_result_files(
    search_dirs: Iterable[Path | str],
    systems_filter: Optional[Iterable[str]] = None
) -> List[DiscoveredSystem]:
    """
    Find results_*.json files directly inside each search directory.

    Args:
        search_dirs: Directories to search (not recursive)
        systems_filter: Exact, case-sensitive system names to keep;
            None or empty keeps all

    Returns:
        DiscoveredSystem list sorted by system name; empty if nothing matched
    """
    accepted = set(systems_filter) if systems_filter else None
    seen_paths = set()
    discovered: List[DiscoveredSystem] = []

    for search_dir in search_dirs:
        search_dir = resolve_input_path(str(search_dir))

        if not search_dir.is_dir():
            logger.warning(f"Search directory not found: {search_dir}")
            continue

        for path in sorted(search_dir.glob(EVALUATION_CONFIG["results_glob"])):
            if not path.is_file():
                continue

            system_name = extract_system_name(path.name)
            if system_name is None:
                continue

            if accepted is not None and system_name not in accepted:
                logger.debug(f"Skipping {system_name}: not in systems filter")
                continue

            file_path = path.absolute()
            if file_path in seen_paths:
                continue
            seen_paths.add(file_path)

            discovered.append(DiscoveredSystem(system_name=system_name, file_path=file_path))

    discovered.sort(key=lambda item: system_sort_key(item.system_name))

    logger.info(f"Discovered {len(discovered)} system result file(s)")
    for item in discovered:
        logger.debug(f"  • {item.system_name}: {item.file_path}")

    return discovered
