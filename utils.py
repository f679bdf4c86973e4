from typing import Any, List

import csv
import io
import math
import os

from config import DISPLAY_DIGITS
from results import Result, row_values


def format_value(value: Any, digits: int = DISPLAY_DIGITS) -> str:
    """Fixed decimals for a table value, N/A for an undefined error."""
    if value is None or math.isnan(value):
        return "N/A"
    return f"{float(value):.{digits}f}"


def format_rows(result: Result, digits: int = DISPLAY_DIGITS) -> List[List[str]]:
    """Table cells per row: the iteration index as-is, every other field with fixed decimals."""
    return [
        [str(row.k)] + [format_value(v, digits) for v in row_values(row)[1:]]
        for row in result.iterations
    ]


def iterations_to_csv_string(result: Result) -> str:
    """
    Convert the iteration table to CSV text.
    Columns follow the method's headers; an undefined error is left empty.
    """
    if not result.iterations:
        return ""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(result.headers)
    for row in result.iterations:
        writer.writerow(["" if v is None else v for v in row_values(row)])
    return buf.getvalue()


def save_iterations_to_csv(result: Result, filepath: str) -> None:
    """
    Save the iteration table to filepath, creating parent folders. Overwrites if exists.
    """
    ensure_dir_for_file(filepath)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        f.write(iterations_to_csv_string(result))


def ensure_dir_for_file(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)
