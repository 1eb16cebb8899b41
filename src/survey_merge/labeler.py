"""
Answer Labeler: maps raw answer text to its canonical option tag.

Comparison is exact (no trimming, no case folding) against the question's
option texts in the order O, A, B, C, D; the first match wins. Empty option
texts never match, so questions without a Variant stay unlabeled.
"""

from typing import Optional

from survey_merge.model import Question, Survey, Variant


def match_label(variants: Variant, text: str) -> Optional[str]:
    """Return the tag of the first option whose text equals `text`, or None."""
    for tag, option_text in variants.options():
        if option_text and option_text == text:
            return tag
    return None


def label_question(question: Question) -> Question:
    """Set answer_label on every answer that matches an option. Idempotent."""
    for answer in question.answers:
        tag = match_label(question.variants, answer.answer)
        if tag is not None:
            answer.answer_label = tag
    return question


def label_survey(survey: Survey) -> Survey:
    for question in survey.questions:
        label_question(question)
    return survey


__all__ = ["match_label", "label_question", "label_survey"]
