import os
import re
from datetime import datetime
from glob import glob
from os.path import basename, getmtime, isfile, join
from typing import Optional

from mne_bids import BIDSPath
from pydantic import BaseModel, ConfigDict

from cannbids_constants import (
    DATATYPE,
    DATE_FORMAT,
    EMPTYROOM_SUBJECT,
    FILENAME_DELIMITER,
    HIDDEN_PREFIX,
    NOISE_TASK,
    RAW_EXTENSIONS,
    SESSION_LABELS,
)


class RawFile(BaseModel):
    """A discovered raw recording. The modification time stands in for the
    acquisition time, which is not available without reading the file."""
    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    modified: datetime

    @classmethod
    def from_path(cls, path: str):
        path = os.path.abspath(path)
        return cls(path=path, name=basename(path), modified=datetime.fromtimestamp(getmtime(path)))


def _has_extension(file_name: str, extensions: list):
    return any(file_name.lower().endswith(ext.lower()) for ext in extensions)


def discover_raw_files(path_raw: str, extensions: list = None):
    """
    List raw recordings in a flat directory, sorted by name.
    macOS resource fork files (._*) are skipped.
    """
    extensions = extensions or RAW_EXTENSIONS
    raw_files = []
    for file_name in sorted(glob('*', root_dir=path_raw)):
        full_path = join(path_raw, file_name)
        if file_name.startswith(HIDDEN_PREFIX) or not isfile(full_path):
            continue
        if _has_extension(file_name, extensions):
            raw_files.append(RawFile.from_path(full_path))
    return raw_files


def tokenize(file_name: str, extensions: list = None):
    """
    Split a raw filename into its underscore separated parts, with the file
    extension removed from every part. Case is preserved.
    """
    extensions = extensions or RAW_EXTENSIONS
    ext_pattern = re.compile('(' + '|'.join(re.escape(ext) for ext in extensions) + ')$', re.IGNORECASE)
    return [ext_pattern.sub('', part) for part in file_name.split(FILENAME_DELIMITER)]


def resolve_subject(tokens: list) -> Optional[str]:
    if not tokens or not tokens[0]:
        return None
    return tokens[0]


def resolve_session(tokens: list) -> Optional[str]:
    """
    Session label from the third filename part, e.g. V1 -> v1.
    Returns None unless the name has exactly three parts and a known session.
    """
    if len(tokens) != 3:
        return None
    session = tokens[2].lower()
    if session not in SESSION_LABELS:
        return None
    return session


def acquisition_date(timestamp: datetime):
    return timestamp.strftime(DATE_FORMAT)


def link_empty_room(timestamp: datetime, datatype: str = DATATYPE, extension: str = '.fif'):
    """
    Relative path of the empty room recording collected on the acquisition date.
    Only one empty room recording per date can be referenced.
    """
    session = acquisition_date(timestamp)
    er_path = BIDSPath(
        subject=EMPTYROOM_SUBJECT,
        session=session,
        task=NOISE_TASK,
        datatype=datatype,
        suffix=datatype,
        extension=extension
    )
    return '/'.join([f'sub-{er_path.subject}', f'ses-{er_path.session}', er_path.datatype, er_path.basename])
