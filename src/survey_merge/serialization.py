"""
Serialization helpers for Survey objects.

Provides JSON/YAML round-trip via an intermediate dict representation.
The dict layout is the snapshot file format and must stay stable:

    id, questions[index, description, variants{A,B,C,D,O},
                  answers[role, team, fio, timest, answer, answerLabel]],
    participants
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from survey_merge.model import Answer, Question, Survey, Variant

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ExportError(Exception):
    """Raised when a snapshot or results file cannot be written."""
    pass


def variant_to_dict(v: Variant) -> Dict[str, str]:
    return {"A": v.A, "B": v.B, "C": v.C, "D": v.D, "O": v.O}


def variant_from_dict(d: Dict[str, Any] | None) -> Variant:
    d = d or {}
    return Variant(A=d.get("A", ""), B=d.get("B", ""), C=d.get("C", ""), D=d.get("D", ""), O=d.get("O", ""))


def answer_to_dict(a: Answer) -> Dict[str, str]:
    return {
        "role": a.role,
        "team": a.team,
        "fio": a.fio,
        "timest": a.timest,
        "answer": a.answer,
        "answerLabel": a.answer_label,
    }


def answer_from_dict(d: Dict[str, Any]) -> Answer:
    return Answer(
        role=d.get("role", ""),
        team=d.get("team", ""),
        fio=d.get("fio", ""),
        timest=d.get("timest", ""),
        answer=d.get("answer", ""),
        answer_label=d.get("answerLabel", ""),
    )


def question_to_dict(q: Question) -> Dict[str, Any]:
    return {
        "index": q.index,
        "description": q.description,
        "variants": variant_to_dict(q.variants),
        "answers": [answer_to_dict(a) for a in q.answers],
    }


def question_from_dict(d: Dict[str, Any]) -> Question:
    return Question(
        index=int(d.get("index", 0)),
        description=d["description"],
        variants=variant_from_dict(d.get("variants")),
        answers=[answer_from_dict(a) for a in d.get("answers") or []],
    )


def survey_to_dict(s: Survey) -> Dict[str, Any]:
    return {
        "id": s.id,
        "questions": [question_to_dict(q) for q in s.questions],
        "participants": list(s.participants),
    }


def survey_from_dict(d: Dict[str, Any]) -> Survey:
    return Survey(
        id=d.get("id", ""),
        questions=[question_from_dict(q) for q in d.get("questions") or []],
        participants=list(d.get("participants") or []),
    )


def survey_to_json(s: Survey) -> str:
    return json.dumps(survey_to_dict(s), ensure_ascii=False, indent=1)


def survey_from_json(s: str) -> Survey:
    d = json.loads(s)
    return survey_from_dict(d)


def survey_to_yaml(s: Survey) -> str:
    return yaml.safe_dump(survey_to_dict(s), allow_unicode=True, sort_keys=False)


def survey_from_yaml(s: str) -> Survey:
    d = yaml.safe_load(s)
    return survey_from_dict(d)


def _write_text(path: Path, text: str) -> Path:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    return path


def export_survey_json(s: Survey, output_dir: PathLike = ".") -> Path:
    """
    Write the full snapshot to `<id>.json`, replacing any existing file.

    Raises:
        ExportError: If the file can't be written
    """
    path = _write_text(Path(output_dir) / f"{s.id}.json", survey_to_json(s))
    logger.debug("Wrote JSON snapshot to %s", path)
    return path


def export_survey_yaml(s: Survey, output_dir: PathLike = ".") -> Path:
    path = _write_text(Path(output_dir) / f"{s.id}.yaml", survey_to_yaml(s))
    logger.debug("Wrote YAML snapshot to %s", path)
    return path


def load_survey_json(filepath: PathLike) -> Survey:
    """Load a survey back from a JSON snapshot file."""
    return survey_from_json(Path(filepath).read_text(encoding="utf-8"))
