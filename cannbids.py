"""Thin wrapper for the split cannbids modules."""

from cannbids_constants import (
    RAW_EXTENSIONS,
    SESSION_LABELS,
    DEFAULT_CONFIG,
    CONVERSION_TABLE_FIELDS,
)
from cannbids_utils import setLogPath, get_parameters, log_problem_file, problem_log_path
from cannbids_parsing import RawFile, discover_raw_files, tokenize, resolve_subject, resolve_session, link_empty_room
from cannbids_tasks import RecordingCategory, RECORDING_CATEGORIES, classify
from cannbids_jobs import ClassificationError, SessionUnresolved, TaskUnresolved, SubjectUnresolved, ConversionJob, build_job
from cannbids_templates import create_dataset_description
from cannbids_conversion import convert_job, update_scans_acq_time
from cannbids_pipeline import bidsify, write_conversion_table, args_parser, main

__all__ = [
    'RAW_EXTENSIONS',
    'SESSION_LABELS',
    'DEFAULT_CONFIG',
    'CONVERSION_TABLE_FIELDS',
    'setLogPath',
    'get_parameters',
    'log_problem_file',
    'problem_log_path',
    'RawFile',
    'discover_raw_files',
    'tokenize',
    'resolve_subject',
    'resolve_session',
    'link_empty_room',
    'RecordingCategory',
    'RECORDING_CATEGORIES',
    'classify',
    'ClassificationError',
    'SessionUnresolved',
    'TaskUnresolved',
    'SubjectUnresolved',
    'ConversionJob',
    'build_job',
    'create_dataset_description',
    'convert_job',
    'update_scans_acq_time',
    'bidsify',
    'write_conversion_table',
    'args_parser',
    'main',
]

if __name__ == '__main__':
    main()
