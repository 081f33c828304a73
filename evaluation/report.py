"""
CSV report writer for evaluation rows.
"""
import csv
import logging
from pathlib import Path
from typing import Iterable

from config import get_report_columns

logger = logging.getLogger(__name__)

REPORT_COLUMNS = tuple(get_report_columns())


def write_report_csv(rows: Iterable, output_path: Path | str) -> Path:
    """
    Save report rows to a CSV file, overwriting it.

    Args:
        rows: ReportRow objects (or dicts keyed by REPORT_COLUMNS) in output order
        output_path: Destination CSV path

    Returns:
        Absolute path of the written file
    """
    output_path = Path(output_path).absolute()
    output_path.parent.mkdir(parents=True, exist_ok=True)

    records = [row if isinstance(row, dict) else row.to_dict() for row in rows]

    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=REPORT_COLUMNS, extrasaction='ignore')
        writer.writeheader()
        writer.writerows(records)

    logger.debug(f"Wrote {len(records)} rows to {output_path}")
    return output_path
