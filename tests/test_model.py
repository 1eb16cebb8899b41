"""
Tests for the core model objects.

These tests verify:
    - Basic model creation
    - Participant composite strings
    - Deduplication invariants and first-seen order
    - Retrieval methods
"""

import dataclasses

import pytest
from survey_merge.model import (
    Answer,
    Question,
    Survey,
    Variant,
    new_survey,
    participant_display,
    split_participant,
)


class TestVariant:
    """Test Variant objects."""

    def test_defaults_are_empty(self):
        """A default Variant has five empty options."""
        v = Variant()
        assert v.is_empty()
        assert [text for _, text in v.options()] == ["", "", "", "", ""]

    def test_option_order(self):
        """Options are yielded in labeling order O, A, B, C, D."""
        v = Variant(A="a", B="b", C="c", D="d", O="o")
        assert list(v.options()) == [("O", "o"), ("A", "a"), ("B", "b"), ("C", "c"), ("D", "d")]
        assert not v.is_empty()

    def test_variant_is_immutable(self):
        v = Variant(A="Yes")
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.A = "No"


class TestQuestionAndAnswer:
    """Test Question and Answer objects."""

    def test_question_defaults(self):
        q = Question(index=3, description="Favourite colour?")
        assert q.variants == Variant()
        assert q.answers == []

    def test_answer_label_defaults_empty(self):
        a = Answer(role="Dev", team="Blue", fio="Alice", timest="t1", answer="Yes")
        assert a.answer_label == ""

    def test_questions_do_not_share_answer_lists(self):
        q1 = Question(index=1, description="A")
        q2 = Question(index=2, description="B")
        q1.answers.append(Answer(role="", team="", fio="", timest="", answer="x"))
        assert q2.answers == []


class TestParticipants:
    """Test participant composite strings."""

    def test_display_format(self):
        assert participant_display("Alice Smith", "Lead") == "Alice Smith (Lead)"

    def test_split_recovers_name(self):
        assert split_participant("Alice Smith (Lead)") == "Alice Smith"

    def test_split_uses_first_separator(self):
        """Role text containing " (" doesn't affect the name."""
        assert split_participant("Bob (QA (manual))") == "Bob"

    def test_add_participant_deduplicates(self):
        survey = Survey(id="s")
        survey.add_participant("Alice", "R1")
        survey.add_participant("Alice", "R1")
        assert survey.participants == ["Alice (R1)"]

    def test_different_role_is_different_participant(self):
        survey = Survey(id="s")
        survey.add_participant("Alice", "R1")
        survey.add_participant("Alice", "R2")
        assert survey.participants == ["Alice (R1)", "Alice (R2)"]
        assert survey.has_participant("Alice (R2)")

    def test_duplicate_participants_rejected_on_construction(self):
        with pytest.raises(ValueError):
            Survey(id="s", participants=["Alice (R1)", "Alice (R1)"])


class TestSurveyQuestions:
    """Test question registration and lookup."""

    def test_get_question(self):
        survey = Survey(id="s", questions=[Question(index=1, description="Q1")])
        assert survey.get_question("Q1").index == 1
        assert survey.get_question("Q2") is None

    def test_lookup_is_exact(self):
        """No trimming or case folding in question identity."""
        survey = Survey(id="s", questions=[Question(index=1, description="Q1")])
        assert survey.get_question("q1") is None
        assert survey.get_question("Q1 ") is None

    def test_add_question_returns_existing(self):
        survey = Survey(id="s")
        first = survey.add_question(Question(index=1, description="Q1", variants=Variant(A="Yes")))
        second = survey.add_question(Question(index=7, description="Q1"))
        assert second is first
        assert len(survey.questions) == 1
        assert survey.questions[0].index == 1

    def test_add_question_keeps_order(self):
        survey = Survey(id="s")
        for name in ["C", "A", "B"]:
            survey.add_question(Question(index=0, description=name))
        assert [q.description for q in survey.questions] == ["C", "A", "B"]

    def test_duplicate_questions_rejected_on_construction(self):
        with pytest.raises(ValueError):
            Survey(id="s", questions=[Question(index=1, description="Q"), Question(index=2, description="Q")])

    def test_new_survey_copies_schema_list(self):
        schema = [Question(index=1, description="Q1")]
        survey = new_survey("Results", schema)
        survey.add_question(Question(index=2, description="Extra"))
        assert len(schema) == 1
        assert survey.id == "Results"
        assert survey.participants == []
