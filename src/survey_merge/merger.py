"""
Response Merger: folds one response file into the accumulated Survey.

Each file's row 0 holds its column headers (timestamp, role, team, full
name, then question descriptions). Headers are matched to questions by
description text, so files with different column orders merge correctly.
"""

import warnings
from pathlib import Path
from typing import List, Optional, Union

from survey_merge.csv_parser import CSVParseError, read_csv_file
from survey_merge.model import Answer, Question, Survey

TIMESTAMP_COL = 0
ROLE_COL = 1
TEAM_COL = 2
FIO_COL = 3
MIN_HEADER_COLUMNS = FIO_COL + 1


def register_questions(survey: Survey, header: List[str]) -> List[Question]:
    """
    Make sure every header is a question of the survey.

    New questions get an empty Variant and index = column position in this
    file.

    Returns:
        The survey question for each header column, aligned with the header
    """
    return [
        survey.add_question(Question(index=col, description=description))
        for col, description in enumerate(header)
    ]


def merge_rows(survey: Survey, rows: List[List[str]], source: Optional[str] = None) -> Survey:
    """
    Merge parsed response rows into the survey.

    Args:
        survey: Survey accumulated so far; mutated in place
        rows: Row 0 is the header row, the rest are submissions
        source: Name used in warnings (usually the file path)

    Returns:
        The same survey, with questions/participants possibly grown and
        answers appended in row order

    Raises:
        CSVParseError: If the header has fewer than four columns
    """
    source = source or "<rows>"
    if not rows:
        warnings.warn(f"{source}: no header row, nothing to merge", UserWarning)
        return survey

    header = rows[0]
    if len(header) < MIN_HEADER_COLUMNS:
        raise CSVParseError(
            f"{source}: header has {len(header)} columns, expected at least {MIN_HEADER_COLUMNS}"
        )

    columns = register_questions(survey, header)

    for line_num, row in enumerate(rows[1:], start=2):
        if not row:
            continue
        if len(row) != len(header):
            warnings.warn(
                f"{source}:{line_num}: row has {len(row)} columns, header has {len(header)}; row skipped",
                UserWarning,
            )
            continue

        timestamp = row[TIMESTAMP_COL]
        role = row[ROLE_COL]
        team = row[TEAM_COL]
        fio = row[FIO_COL]
        survey.add_participant(fio, role)

        for question, cell in zip(columns, row):
            question.answers.append(
                Answer(role=role, team=team, fio=fio, timest=timestamp, answer=cell)
            )

    return survey


def merge_file(survey: Survey, filepath: Union[str, Path]) -> Survey:
    """
    Read one response CSV and merge it into the survey.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CSVParseError: If the file can't be parsed
    """
    rows = read_csv_file(filepath)
    return merge_rows(survey, rows, source=str(filepath))


__all__ = ["merge_rows", "merge_file", "register_questions"]
