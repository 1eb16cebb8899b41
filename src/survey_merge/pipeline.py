"""
Driving loop: schema -> merge fold -> label -> export.

Error policy:
    - Schema file or input directory unusable: fatal (exception propagates)
    - A response file that can't be read/parsed: skipped, logged
    - A snapshot or results file that can't be written: logged, recorded,
      the run continues
"""

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from survey_merge.config import RunConfig
from survey_merge.csv_parser import CSVParseError, load_schema
from survey_merge.labeler import label_survey
from survey_merge.merger import merge_file
from survey_merge.model import Survey, new_survey
from survey_merge.results import export_results_csv
from survey_merge.serialization import ExportError, export_survey_json, export_survey_yaml

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    survey: Survey
    schema_descriptions: List[str] = field(default_factory=list)
    merged_files: List[Path] = field(default_factory=list)
    skipped_files: List[Path] = field(default_factory=list)
    export_errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.export_errors


def list_response_files(csv_dir: Union[str, Path]) -> List[Path]:
    """
    Regular files in the input directory, sorted by name.

    Raises:
        FileNotFoundError: If the directory doesn't exist
        NotADirectoryError: If the path is not a directory
    """
    directory = Path(csv_dir)
    if not directory.exists():
        raise FileNotFoundError(f"Input directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Input path is not a directory: {directory}")
    return sorted((p for p in directory.iterdir() if p.is_file()), key=lambda p: p.name)


def _export(result: RunResult, exporter, survey: Survey, output_dir: Path) -> None:
    try:
        exporter(survey, output_dir)
    except ExportError as e:
        logger.error("%s", e)
        result.export_errors.append(str(e))


def merge_all(survey: Survey, files: List[Path], result: RunResult, output_dir: Path) -> Survey:
    """Fold every response file into the survey, snapshotting after each one."""
    for path in files:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                survey = merge_file(survey, path)
            except (CSVParseError, OSError) as e:
                error = e
            else:
                error = None
        for w in caught:
            logger.warning("%s", w.message)
        if error is not None:
            logger.warning("Skipping %s: %s", path, error)
            result.skipped_files.append(path)
            continue

        result.merged_files.append(path)
        logger.info("Merged %s (%d participants so far)", path.name, len(survey.participants))
        _export(result, export_survey_json, survey, output_dir)
    return survey


def run(config: RunConfig) -> RunResult:
    """
    Execute one full merge run.

    Raises:
        SchemaError: If the schema file is missing or malformed
        FileNotFoundError / NotADirectoryError: If the input directory is unusable
    """
    questions = load_schema(config.questions_path)
    files = list_response_files(config.csv_path)
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    survey = new_survey(config.survey_id, questions)
    result = RunResult(survey=survey, schema_descriptions=[q.description for q in questions])
    logger.info("Merging %d files from %s", len(files), config.csv_path)

    survey = merge_all(survey, files, result, output_dir)
    label_survey(survey)
    result.survey = survey

    _export(result, export_survey_json, survey, output_dir)
    if config.yaml_snapshot:
        _export(result, export_survey_yaml, survey, output_dir)
    _export(result, export_results_csv, survey, output_dir)
    return result
