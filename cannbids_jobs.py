from datetime import datetime
from typing import Optional

from mne_bids import BIDSPath
from pydantic import BaseModel, ConfigDict

from cannbids_constants import (
    ACQ_TIME_FORMAT,
    DATATYPE,
    DEFAULT_CONFIG,
    EMPTYROOM_SUBJECT,
    INSTITUTION_FIELDS,
    SESSION_UNRESOLVED,
    TASK_UNRESOLVED,
)
from cannbids_parsing import RawFile, acquisition_date, link_empty_room, resolve_session, resolve_subject, tokenize
from cannbids_tasks import classify

SUBJECT_UNRESOLVED = 'subject unresolved'


class ClassificationError(ValueError):
    """A raw filename that cannot be mapped to BIDS identifiers."""
    kind = 'unresolved'

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"unable to determine {self.kind.split()[0]} from filename {filename}")


class SessionUnresolved(ClassificationError):
    kind = SESSION_UNRESOLVED


class TaskUnresolved(ClassificationError):
    kind = TASK_UNRESOLVED


class SubjectUnresolved(ClassificationError):
    kind = SUBJECT_UNRESOLVED


class ConversionJob(BaseModel):
    """Everything the converter needs for one raw file."""
    model_config = ConfigDict(frozen=True)

    source: str
    bids_root: str
    subject: str
    session: str
    task: str
    run: Optional[int] = None
    datatype: str = DATATYPE
    acq_time: datetime
    category: str
    task_entries: dict
    associated_empty_room: Optional[str] = None
    static_entries: dict = {}
    overwrite: bool = False

    def bids_path(self):
        return BIDSPath(
            root=self.bids_root or None,
            subject=self.subject,
            session=self.session,
            task=self.task,
            run=None if self.run is None else str(self.run).zfill(2),
            datatype=self.datatype
        )

    def acq_time_label(self):
        return self.acq_time.strftime(ACQ_TIME_FORMAT)

    def sidecar_entries(self):
        entries = dict(self.static_entries) | dict(self.task_entries)
        if self.associated_empty_room:
            entries['AssociatedEmptyRoom'] = self.associated_empty_room
        return entries


def static_sidecar_entries(config: dict):
    """Institution and MEG hardware fields shared by every recording."""
    entries = {field: config.get(field, DEFAULT_CONFIG[field]) for field in INSTITUTION_FIELDS}
    entries.update(config.get('MEG') or DEFAULT_CONFIG['MEG'])
    return entries


def bids_subject(tokens: list, filename: str):
    """
    Subject label from the first filename part, kept verbatim. Raises
    SubjectUnresolved when it is missing or not a valid BIDS label.
    """
    subject = resolve_subject(tokens)
    if subject is None:
        raise SubjectUnresolved(filename)
    try:
        BIDSPath(subject=subject)
    except ValueError as e:
        raise SubjectUnresolved(filename) from e
    return subject


def build_job(raw_file: RawFile, config: dict):
    """
    Resolve a raw file into a ConversionJob.

    The task is classified first; the noise category replaces subject and
    session with the empty room sentinel and the acquisition date, every other
    category needs a known session and links to that date's empty room file.
    Raises a ClassificationError subclass when the filename cannot be resolved.
    """
    tokens = tokenize(raw_file.name, config.get('Extensions'))

    category = classify(tokens[1] if len(tokens) > 1 else '')
    if category is None:
        raise TaskUnresolved(raw_file.name)

    if category.emptyroom:
        subject = EMPTYROOM_SUBJECT
        session = acquisition_date(raw_file.modified)
        empty_room = None
    else:
        session = resolve_session(tokens)
        if session is None:
            raise SessionUnresolved(raw_file.name)
        subject = bids_subject(tokens, raw_file.name)
        empty_room = link_empty_room(raw_file.modified)

    return ConversionJob(
        source=raw_file.path,
        bids_root=config.get('BIDS', '') or '',
        subject=subject,
        session=session,
        task=category.task,
        run=category.run,
        acq_time=raw_file.modified,
        category=category.key,
        task_entries=category.task_entries(),
        associated_empty_room=empty_room,
        static_entries=static_sidecar_entries(config),
        overwrite=bool(config.get('overwrite', False))
    )
