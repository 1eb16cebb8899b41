"""
Survey Analyzer: read-only summary of a merged survey.

Reports:
    - Question inventory (schema-defined vs. response-only)
    - Participant and answer counts
    - Labeling coverage
    - Warning flags (unanswered questions, options never matched,
      names recorded under more than one role)

IMPORTANT: This module does NOT modify the survey.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from survey_merge.model import Survey, split_participant
from survey_merge.results import is_metadata_question


@dataclass
class SurveyReport:
    """Summary report for a merged survey."""

    survey_id: str
    total_questions: int = 0
    schema_questions: int = 0
    response_only_questions: int = 0
    metadata_questions: int = 0
    total_participants: int = 0

    # Answers
    total_answers: int = 0
    labeled_answers: int = 0
    label_coverage_percent: float = 0.0
    answers_per_question: Dict[str, int] = field(default_factory=dict)
    label_counts: Dict[str, Dict[str, int]] = field(default_factory=dict)

    # Flags
    unanswered_questions: List[str] = field(default_factory=list)
    unlabeled_schema_questions: List[str] = field(default_factory=list)
    names_with_multiple_roles: Dict[str, List[str]] = field(default_factory=dict)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_survey(survey: Survey, schema_descriptions: Optional[Iterable[str]] = None) -> SurveyReport:
    """
    Summarize a merged (and usually labeled) Survey.

    Args:
        survey: Survey to summarize
        schema_descriptions: Descriptions of the questions loaded from the
            schema file. When omitted, a question counts as schema-defined
            if it carries any option text.

    Label coverage only counts answers to schema questions, since answers to
    questions without options can never be labeled.
    """
    report = SurveyReport(survey_id=survey.id)
    report.total_questions = len(survey.questions)
    report.total_participants = len(survey.participants)

    schema = set(schema_descriptions) if schema_descriptions is not None else None
    schema_answers = 0
    for question in survey.questions:
        if schema is None:
            from_schema = not question.variants.is_empty()
        else:
            from_schema = question.description in schema
        if is_metadata_question(question):
            report.metadata_questions += 1
        if from_schema:
            report.schema_questions += 1
        else:
            report.response_only_questions += 1

        report.total_answers += len(question.answers)
        report.answers_per_question[question.description] = len(question.answers)

        counts: Dict[str, int] = defaultdict(int)
        for answer in question.answers:
            if answer.answer_label:
                counts[answer.answer_label] += 1
        labeled = sum(counts.values())
        report.labeled_answers += labeled
        if counts:
            report.label_counts[question.description] = dict(counts)

        if not question.answers:
            report.unanswered_questions.append(question.description)
        elif from_schema:
            schema_answers += len(question.answers)
            if labeled == 0:
                report.unlabeled_schema_questions.append(question.description)

    if schema_answers:
        report.label_coverage_percent = report.labeled_answers / schema_answers * 100

    roles_by_name: Dict[str, List[str]] = defaultdict(list)
    for display in survey.participants:
        roles_by_name[split_participant(display)].append(display)
    report.names_with_multiple_roles = {
        name: displays for name, displays in roles_by_name.items() if len(displays) > 1
    }

    # Warning flags
    if report.unanswered_questions:
        report.add_warning(
            f"Questions without answers: {', '.join(report.unanswered_questions)}"
        )
    if report.unlabeled_schema_questions:
        report.add_warning(
            f"No answer matched an option: {', '.join(report.unlabeled_schema_questions)}"
        )
    for name, displays in report.names_with_multiple_roles.items():
        report.add_warning(
            f"{name} recorded under {len(displays)} roles: {', '.join(displays)}"
        )

    return report


def format_report(report: SurveyReport) -> str:
    lines = [
        f"Survey: {report.survey_id}",
        f"  Questions: {report.total_questions} "
        f"({report.schema_questions} with options, {report.response_only_questions} without, "
        f"{report.metadata_questions} metadata)",
        f"  Participants: {report.total_participants}",
        f"  Answers: {report.total_answers} ({report.labeled_answers} labeled, "
        f"{report.label_coverage_percent:.1f}% of answers to questions with options)",
    ]
    if report.warnings:
        lines.append(f"  Warnings ({len(report.warnings)}):")
        lines.extend(f"    - {w}" for w in report.warnings)
    return "\n".join(lines)
