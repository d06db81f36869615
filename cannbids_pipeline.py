import argparse
import sys
from datetime import datetime
from os.path import dirname, isabs, join

import pandas as pd
from tqdm import tqdm

from cannbids_constants import CONVERSION_TABLE_FIELDS
from cannbids_conversion import convert_job
from cannbids_jobs import ClassificationError, ConversionJob, build_job
from cannbids_parsing import discover_raw_files
from cannbids_templates import create_dataset_description
from cannbids_utils import get_parameters, log_problem_file, problem_log_path, setLogPath

CONVERSION_COLUMNS = list(CONVERSION_TABLE_FIELDS)


def _job_fields(job: ConversionJob) -> dict:
    bids_path = job.bids_path()
    return {
        'participant': job.subject,
        'session': job.session,
        'task': job.task,
        'run': job.run,
        'category': job.category,
        'associated_empty_room': job.associated_empty_room,
        'bids_path': str(bids_path.directory),
        'bids_name': bids_path.basename,
    }


def _convert_file(raw_file, n_file: int, n_files: int, config: dict, converter, dry_run: bool, problem_log: str):
    row = {
        'acq_time': raw_file.modified.isoformat(timespec='seconds'),
        'raw_path': dirname(raw_file.path),
        'raw_name': raw_file.name,
    }

    try:
        job = build_job(raw_file, config)
    except ClassificationError as e:
        print(f"PROBLEM: {e}")
        log_problem_file(problem_log, raw_file.name, e.kind)
        row.update(status='check', problem=e.kind)
        return row

    row.update(_job_fields(job))

    if dry_run:
        row['status'] = 'run'
        return row

    print(f"Processing file {n_file}/{n_files}: {raw_file.name}")
    try:
        converter(job)
        row['status'] = 'processed'
    except Exception as e:
        print(f"Error processing file {raw_file.name}: {e}")
        row['status'] = 'error'
    return row


def bidsify(config: dict, raw_files: list = None, converter=convert_job, dry_run: bool = False):
    """
    Resolve every raw file and hand the resulting jobs to the converter.

    Files whose name cannot be resolved are appended to the problem log and
    skipped; converter failures are reported and the batch moves on. Returns
    the conversion table with one row per raw file.
    """
    ts = datetime.now().strftime('%Y%m%d')
    path_raw = config.get('Raw', '')
    problem_log = problem_log_path(config)

    if raw_files is None:
        raw_files = discover_raw_files(path_raw, config.get('Extensions'))

    if not raw_files:
        print(f"[INFO] No raw files found in {path_raw}")
        return pd.DataFrame(columns=CONVERSION_COLUMNS)

    pbar = tqdm(
        total=len(raw_files),
        desc="Bidsify files",
        unit=" file(s)",
        disable=not sys.stdout.isatty(),
        ncols=80,
        bar_format='{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]'
    )

    rows = []
    for n, raw_file in enumerate(raw_files, start=1):
        row = _convert_file(raw_file, n, len(raw_files), config, converter, dry_run, problem_log)
        row['time_stamp'] = ts
        rows.append(row)
        pbar.update(1)

    pbar.close()

    table = pd.DataFrame(rows, columns=CONVERSION_COLUMNS)
    status_counts = table['status'].value_counts().to_dict()
    print(
        "Run summary: total={total} run={run} processed={processed} check={check} error={error}".format(
            total=len(table),
            run=status_counts.get('run', 0),
            processed=status_counts.get('processed', 0),
            check=status_counts.get('check', 0),
            error=status_counts.get('error', 0)
        )
    )
    if status_counts.get('check', 0):
        print(f"[INFO] Unresolved filenames were appended to {problem_log}")
    return table


def write_conversion_table(table: pd.DataFrame, config: dict):
    conversion_file = config.get('Conversion_file') or 'bids_conversion.tsv'
    if not isabs(conversion_file):
        conversion_file = join(setLogPath(config), conversion_file)
    table.to_csv(conversion_file, sep='\t', index=False)
    print(f"[INFO] Conversion table written to: {conversion_file}")
    return conversion_file


def args_parser(argv=None):
    """
    Parse command-line arguments for cannbids script.
    """
    parser = argparse.ArgumentParser(
        description=(
            "\n"
            "CANN MEG to BIDS conversion\n\n"
            "Raw files are expected as <subject>_<task>_<session>.fif, e.g. 001_rest1_V1.fif\n\n"
            "Main Operations:\n"
            "    --analyse  Resolve filenames and write the conversion table only (no conversion)\n"
            "    --run      Execute the BIDS conversion\n\n"
            "Arguments:\n"
            "    --config   Path to config file (YAML or JSON)\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=True
    )
    parser.add_argument('--config', type=str, required=True, help='Path to config file (YAML or JSON)')
    parser.add_argument('--analyse', action='store_true', help='Resolve filenames and write conversion table only')
    parser.add_argument('--run', action='store_true', help='Execute BIDS conversion')
    return parser.parse_args(argv)


def main(argv=None):
    """
    Main entry point for the conversion pipeline.
    """
    args = args_parser(argv)
    config = get_parameters(args.config)

    if not (args.analyse or args.run):
        print('Nothing to do, use --analyse or --run')
        return False

    if args.analyse and not args.run:
        print("Resolving raw filenames only")
        table = bidsify(config, dry_run=True)
        write_conversion_table(table, config)

    if args.run:
        print("Running full BIDS conversion")
        create_dataset_description(config)
        table = bidsify(config)
        write_conversion_table(table, config)

    return True


if __name__ == "__main__":
    main()
