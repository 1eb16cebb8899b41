"""
Core Survey Model Objects

Defines the data structures of a merged survey:
    - Variant (the multiple-choice option set of a question)
    - Question (one survey item, identified by its description)
    - Answer (one participant's response to one question)
    - Survey (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about CSV, JSON or the file system
        - Keep first-seen order for questions and participants
        - Are fully serializable
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


OPTION_TAGS = ("O", "A", "B", "C", "D")
PARTICIPANT_SEPARATOR = " ("


@dataclass(frozen=True)
class Variant:
    """
    The option texts of a single question.

    A, B, C, D are the multiple-choice options, O is the "other"/baseline
    option. Only questions defined in the schema file carry a populated
    Variant; questions first seen in a response file get an empty one.
    """

    A: str = ""
    B: str = ""
    C: str = ""
    D: str = ""
    O: str = ""

    def options(self) -> Iterator[Tuple[str, str]]:
        """Yield (tag, text) pairs in labeling order: O, A, B, C, D."""
        for tag in OPTION_TAGS:
            yield tag, getattr(self, tag)

    def is_empty(self) -> bool:
        return not any(text for _, text in self.options())


@dataclass
class Answer:
    """
    One participant's response to one question.

    Properties:
        role: Role as entered by the participant
        team: Team name
        fio: Full name
        timest: Submission timestamp, kept verbatim
        answer: Raw answer text
        answer_label: Option tag (O/A/B/C/D) once labeled, else ""
    """

    role: str
    team: str
    fio: str
    timest: str
    answer: str
    answer_label: str = ""


@dataclass
class Question:
    """
    A single survey item.

    Identity is the description text. The index is informational only: for
    schema questions it is the 1-based schema column, for questions first
    seen in a response file it is the column in that file.
    """

    index: int
    description: str
    variants: Variant = field(default_factory=Variant)
    answers: List[Answer] = field(default_factory=list)


def participant_display(fio: str, role: str) -> str:
    """Build the composite participant key, e.g. "Alice (Lead)"."""
    return f"{fio}{PARTICIPANT_SEPARATOR}{role})"


def split_participant(display: str) -> str:
    """Recover the bare full name from a composite participant string."""
    return display.split(PARTICIPANT_SEPARATOR, 1)[0]


@dataclass
class Survey:
    """
    Root container for one run's merged survey.

    Properties:
        id:
            Survey identifier, also the output filename stem

        questions:
            Deduplicated questions in first-seen order

        participants:
            Deduplicated "<Full Name> (<Role>)" strings in first-seen order

    INVARIANTS:
        - No two questions share a description
        - No participant string appears twice
        Both are enforced through the lookup indexes below, which map the
        key string to its position in the list. Mutate the lists only
        through add_question / add_participant.
    """

    id: str
    questions: List[Question] = field(default_factory=list)
    participants: List[str] = field(default_factory=list)
    _question_index: Dict[str, int] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _participant_index: Dict[str, int] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for pos, question in enumerate(self.questions):
            if question.description in self._question_index:
                raise ValueError(f"Duplicate question description: {question.description!r}")
            self._question_index[question.description] = pos
        for pos, display in enumerate(self.participants):
            if display in self._participant_index:
                raise ValueError(f"Duplicate participant: {display!r}")
            self._participant_index[display] = pos

    def get_question(self, description: str) -> Optional[Question]:
        """
        Retrieve a question by its exact description.

        Returns:
            Question object or None if not found
        """
        pos = self._question_index.get(description)
        if pos is None:
            return None
        return self.questions[pos]

    def add_question(self, question: Question) -> Question:
        """
        Append a question unless one with the same description exists.

        Returns:
            The question stored in the survey (the existing one on a clash)
        """
        existing = self.get_question(question.description)
        if existing is not None:
            return existing
        self._question_index[question.description] = len(self.questions)
        self.questions.append(question)
        return question

    def has_participant(self, display: str) -> bool:
        return display in self._participant_index

    def add_participant(self, fio: str, role: str) -> str:
        """Register a participant if absent and return its composite string."""
        display = participant_display(fio, role)
        if display not in self._participant_index:
            self._participant_index[display] = len(self.participants)
            self.participants.append(display)
        return display


def new_survey(survey_id: str, schema_questions: List[Question]) -> Survey:
    """Create the schema-seeded, participant-free survey skeleton."""
    return Survey(id=survey_id, questions=list(schema_questions))
