"""
Survey Merge Package

Folds survey-response CSV exports from independent sessions into one
canonical Survey record.

PIPELINE:
---------
    schema CSV  ->  Survey skeleton
    response CSVs  ->  merged Survey (one fold step per file)
    merged Survey  ->  labeled Survey
    labeled Survey  ->  JSON snapshot + pivoted results CSV

The model package (survey_merge.model) holds no I/O.
Reading, writing and orchestration live in the outer modules.
"""

__version__ = "0.1.0"
