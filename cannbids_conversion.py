from os.path import exists

import mne
import pandas as pd
from mne_bids import BIDSPath, update_sidecar_json, write_raw_bids

from cannbids_jobs import ConversionJob

mne.set_log_level('WARNING')


def update_scans_acq_time(bids_path: BIDSPath, acq_time: str):
    """
    Overwrite the acq_time of a recording in the session scans.tsv.
    """
    scans_path = BIDSPath(
        root=bids_path.root,
        subject=bids_path.subject,
        session=bids_path.session,
        suffix='scans',
        extension='.tsv'
    )
    if not exists(scans_path.fpath):
        print(f"[WARN] No scans file found for {bids_path.basename}")
        return

    scans = pd.read_csv(scans_path.fpath, sep='\t', dtype=str, keep_default_na=False)
    scan_name = f"{bids_path.datatype}/{bids_path.basename}"
    mask = scans['filename'] == scan_name
    if not mask.any():
        print(f"[WARN] {scan_name} not listed in {scans_path.basename}")
        return

    scans.loc[mask, 'acq_time'] = acq_time
    scans.to_csv(scans_path.fpath, sep='\t', index=False)


def convert_job(job: ConversionJob):
    """
    Copy one raw recording into the BIDS tree and decorate its sidecar with
    the task, institution and empty room metadata of the job. Existing BIDS
    files are only replaced when the job allows overwriting.
    """
    raw = mne.io.read_raw_fif(job.source, allow_maxshield=True, verbose='error')

    bids_path = write_raw_bids(
        raw=raw,
        bids_path=job.bids_path(),
        empty_room=None,
        overwrite=job.overwrite,
        verbose='error'
    )

    json_path = bids_path.copy().update(extension='.json', split=None)
    update_sidecar_json(json_path, job.sidecar_entries(), verbose=False)
    update_scans_acq_time(bids_path, job.acq_time_label())
    return bids_path
