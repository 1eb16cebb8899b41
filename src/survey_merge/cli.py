#!/usr/bin/env python3
"""
Command-line entry point.

    survey-merge --csvPath csv --qPath questions/questions_answers.csv --surveyID Results

Exit status: 0 on success, 1 on a configuration error (schema file, input
directory or config file unusable), 2 when an output file could not be
written.
"""

import argparse
import logging
import sys
from typing import List, Optional

from survey_merge.analyzer import analyze_survey, format_report
from survey_merge.config import ConfigError, RunConfig, load_config
from survey_merge.csv_parser import SchemaError
from survey_merge.pipeline import run

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_EXPORT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="survey-merge",
        description="Merge survey response CSV files into a JSON snapshot and a results table.",
    )
    parser.add_argument("--csvPath", "--csv-path", dest="csv_path",
                        help="Path to folder with CSV files with responses (default: csv)")
    parser.add_argument("--qPath", "--questions-path", dest="questions_path",
                        help="Path to CSV file with questions and answer variants "
                             "(default: questions/questions_answers.csv)")
    parser.add_argument("--surveyID", "--survey-id", dest="survey_id",
                        help="ID of the survey, used as output filename stem")
    parser.add_argument("--output-dir", dest="output_dir",
                        help="Directory for output files (default: current directory)")
    parser.add_argument("--config", help="YAML config file with default options")
    parser.add_argument("--yaml", dest="yaml_snapshot", action="store_true", default=None,
                        help="Also write a YAML snapshot")
    parser.add_argument("--report", action="store_true",
                        help="Print a summary of the merged survey")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    return parser


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def resolve_config(args: argparse.Namespace) -> RunConfig:
    config = load_config(args.config) if args.config else RunConfig()
    return config.with_overrides(
        csv_path=args.csv_path,
        questions_path=args.questions_path,
        survey_id=args.survey_id,
        output_dir=args.output_dir,
        yaml_snapshot=args.yaml_snapshot,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    try:
        config = resolve_config(args)
        result = run(config)
    except (ConfigError, SchemaError, OSError) as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR

    if result.skipped_files:
        logger.warning("Skipped %d unreadable files", len(result.skipped_files))
    if args.report:
        print(format_report(analyze_survey(result.survey, result.schema_descriptions)))

    return EXIT_OK if result.ok else EXIT_EXPORT_ERROR


if __name__ == "__main__":
    sys.exit(main())
