"""
Results Pivot Builder: projects a merged Survey into a question-major table.

Layout:
    header:  "", participant 1, participant 2, ...
    rows:    question description, one cell per participant

Each cell holds the participant's answer label if set, else the raw answer
text, else "N/A" when the participant never answered the question.
Metadata questions (timestamp, team, role, name prompts) produce no row.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from survey_merge.csv_parser import write_csv_file
from survey_merge.model import Answer, Question, Survey, split_participant
from survey_merge.serialization import ExportError

logger = logging.getLogger(__name__)

NOT_ANSWERED = "N/A"

METADATA_QUESTIONS = frozenset({
    "Timestamp",
    "Отметка времени",
    "Название команды",
    "Ваша роль:",
    "Ваше имя и фамилия",
})


def is_metadata_question(question: Question) -> bool:
    return question.description in METADATA_QUESTIONS


def find_answer_by_fio(question: Question, fio: str) -> Optional[Answer]:
    """First answer recorded for the given full name, or None."""
    for answer in question.answers:
        if answer.fio == fio:
            return answer
    return None


def resolve_cell(question: Question, participant: str) -> str:
    answer = find_answer_by_fio(question, split_participant(participant))
    if answer is None:
        return NOT_ANSWERED
    return answer.answer_label or answer.answer


def question_row(question: Question, survey: Survey) -> Optional[List[str]]:
    """Results row for one question, or None for metadata questions."""
    if is_metadata_question(question):
        return None
    return [question.description] + [resolve_cell(question, p) for p in survey.participants]


def build_results_table(survey: Survey) -> List[List[str]]:
    table = [[""] + list(survey.participants)]
    for question in survey.questions:
        row = question_row(question, survey)
        if row is not None:
            table.append(row)
    return table


def results_filename(survey: Survey) -> str:
    return f"{survey.id}_results.csv"


def export_results_csv(survey: Survey, output_dir: Union[str, Path] = ".") -> Path:
    """
    Write the pivoted results table to `<id>_results.csv`.

    Raises:
        ExportError: If the file can't be written
    """
    path = Path(output_dir) / results_filename(survey)
    table = build_results_table(survey)
    try:
        write_csv_file(path, table)
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote results table (%d questions) to %s", len(table) - 1, path)
    return path


__all__ = [
    "METADATA_QUESTIONS",
    "NOT_ANSWERED",
    "is_metadata_question",
    "find_answer_by_fio",
    "build_results_table",
    "export_results_csv",
]
