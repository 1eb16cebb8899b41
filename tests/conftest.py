"""Shared builders for survey-merge tests."""

import csv

import pytest

from survey_merge.model import Answer, Question, Survey, Variant

SCHEMA_ROWS = [
    ["", "Q1", "Q2"],
    ["O", "Z", "Other"],
    ["A", "X", "Yes"],
    ["B", "Y", "No"],
    ["C", "W", "Maybe later"],
    ["D", "V", "Never"],
]

RESPONSE_HEADER = ["Timestamp", "Ваша роль:", "Название команды", "Ваше имя и фамилия"]


def write_csv(path, rows):
    with open(path, "w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(rows)
    return path


@pytest.fixture
def schema_file(tmp_path):
    return write_csv(tmp_path / "questions_answers.csv", SCHEMA_ROWS)


@pytest.fixture
def yes_no_question():
    return Question(
        index=1,
        description="Do you agree?",
        variants=Variant(A="Yes", B="No", C="Partly", D="Unsure", O="Skip"),
    )


def build_sample_survey() -> Survey:
    survey = Survey(id="Sample")
    q1 = survey.add_question(Question(index=1, description="Q1", variants=Variant(O="Z", A="X")))
    q2 = survey.add_question(Question(index=5, description="Free text"))
    survey.add_participant("Alice", "R1")
    survey.add_participant("Bob", "R2")
    q1.answers.append(Answer(role="R1", team="T1", fio="Alice", timest="t1", answer="X", answer_label="A"))
    q1.answers.append(Answer(role="R2", team="T1", fio="Bob", timest="t2", answer="Q"))
    q2.answers.append(Answer(role="R1", team="T1", fio="Alice", timest="t1", answer="Привет"))
    return survey
