"""
CSV reading and writing, and the Schema Loader.

Schema CSV Format:
    row 0:     <label>, question 1, question 2, ...
    rows 1-5:  <label>, option text per question, in the order O, A, B, C, D

Response CSV Format:
    row 0:     timestamp, role, team, full name, question descriptions...
    rows 1-n:  one submission each

Cells are kept verbatim: no trimming, no case folding.
"""

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import List, Sequence, Union

from survey_merge.model import OPTION_TAGS, Question, Variant

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SCHEMA_MIN_ROWS = 1 + len(OPTION_TAGS)


class CSVParseError(Exception):
    """Raised when a CSV file cannot be read or parsed."""
    pass


class SchemaError(CSVParseError):
    """Raised when the question/options schema file is missing or malformed."""
    pass


def parse_csv_string(csv_content: str) -> List[List[str]]:
    """
    Parse CSV text into rows of fields.

    Raises:
        CSVParseError: If the text is not valid CSV
    """
    try:
        return [row for row in csv.reader(StringIO(csv_content, newline=""), strict=True)]
    except csv.Error as e:
        raise CSVParseError(f"Invalid CSV: {e}") from e


def read_csv_file(filepath: PathLike) -> List[List[str]]:
    """
    Read a CSV file into rows of fields.

    Files are decoded as UTF-8; a leading byte-order mark is dropped so the
    first header cell compares equal to its plain spelling.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CSVParseError: If the file can't be decoded or parsed
    """
    path = Path(filepath)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {path}")
    except UnicodeDecodeError as e:
        raise CSVParseError(f"{path} is not valid UTF-8: {e}") from e
    try:
        return parse_csv_string(content)
    except CSVParseError as e:
        raise CSVParseError(f"{path}: {e}") from e


def write_csv_file(filepath: PathLike, rows: Sequence[Sequence[str]]) -> Path:
    """Write rows to a CSV file, replacing any existing file."""
    path = Path(filepath)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)
    return path


def schema_from_rows(rows: List[List[str]]) -> List[Question]:
    """
    Build the ordered schema questions from parsed schema rows.

    Column 0 is a label column and is ignored. Each following column becomes
    one Question with index = its column offset (1-based) and a Variant taken
    from rows 1-5 (O, A, B, C, D).

    Raises:
        SchemaError: If there are fewer than 6 rows, an option row is
            shorter than the header row, or a description repeats
    """
    if len(rows) < SCHEMA_MIN_ROWS:
        raise SchemaError(
            f"Schema needs a header row and {len(OPTION_TAGS)} option rows, got {len(rows)} rows"
        )

    header = rows[0]
    option_rows = dict(zip(OPTION_TAGS, rows[1:SCHEMA_MIN_ROWS]))
    for tag, row in option_rows.items():
        if len(row) < len(header):
            raise SchemaError(
                f"Option row {tag} has {len(row)} columns, header has {len(header)}"
            )

    questions = []
    seen = set()
    for col in range(1, len(header)):
        if header[col] in seen:
            raise SchemaError(f"Duplicate question description {header[col]!r} in schema")
        seen.add(header[col])
        variant = Variant(**{tag: row[col] for tag, row in option_rows.items()})
        questions.append(Question(index=col, description=header[col], variants=variant))
    return questions


def load_schema(filepath: PathLike) -> List[Question]:
    """
    Load the question/options schema file.

    Returns:
        Questions in column order, each with a populated Variant

    Raises:
        SchemaError: If the file is missing, unreadable or malformed
    """
    try:
        rows = read_csv_file(filepath)
    except (OSError, CSVParseError) as e:
        raise SchemaError(f"Cannot read schema file {filepath}: {e}") from e

    questions = schema_from_rows(rows)
    logger.debug("Loaded %d schema questions from %s", len(questions), filepath)
    return questions


__all__ = [
    "CSVParseError",
    "SchemaError",
    "parse_csv_string",
    "read_csv_file",
    "write_csv_file",
    "schema_from_rows",
    "load_schema",
]
