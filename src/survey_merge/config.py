"""
Run configuration.

Values come from, in increasing priority:
    1. Built-in defaults
    2. An optional YAML config file
    3. Explicit command-line flags
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

DEFAULT_CSV_PATH = "csv"
DEFAULT_QUESTIONS_PATH = "questions/questions_answers.csv"
DEFAULT_SURVEY_ID = "Результаты"
DEFAULT_OUTPUT_DIR = "."


class ConfigError(Exception):
    """Raised when a config file is unreadable or has unknown keys."""
    pass


@dataclass(frozen=True)
class RunConfig:
    """
    Options for one merge run.

    Properties:
        csv_path: Directory holding the response CSV files
        questions_path: Schema CSV (questions and option texts)
        survey_id: Output filename stem
        output_dir: Where the snapshot and results files go
        yaml_snapshot: Also write `<survey_id>.yaml` after labeling
    """

    csv_path: str = DEFAULT_CSV_PATH
    questions_path: str = DEFAULT_QUESTIONS_PATH
    survey_id: str = DEFAULT_SURVEY_ID
    output_dir: str = DEFAULT_OUTPUT_DIR
    yaml_snapshot: bool = False

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Copy with the given values replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def config_from_dict(d: Dict[str, Any]) -> RunConfig:
    known = {f.name for f in fields(RunConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    for f in fields(RunConfig):
        value = d.get(f.name)
        if value is not None and type(value) is not type(f.default):
            raise ConfigError(
                f"Config key {f.name} must be {type(f.default).__name__}, got {value!r}"
            )
    return RunConfig().with_overrides(**d)


def load_config(filepath: Union[str, Path]) -> RunConfig:
    """
    Load a YAML config file.

    Raises:
        ConfigError: If the file is missing, not valid YAML, not a mapping,
            or has unknown keys
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {filepath}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {filepath}: {e}") from e

    if data is None:
        return RunConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{filepath}: expected a mapping at top level")
    return config_from_dict(data)
