import os
from datetime import datetime

import pytest

from cannbids_parsing import RawFile
from cannbids_utils import get_parameters

ACQUIRED = datetime(2021, 5, 22, 10, 30, 0)


@pytest.fixture
def raw_dir(tmp_path):
    path = tmp_path / 'raw'
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def make_raw_file(raw_dir):
    def _make(name, modified=ACQUIRED):
        path = raw_dir / name
        path.write_bytes(b'')
        ts = modified.timestamp()
        os.utime(path, (ts, ts))
        return RawFile.from_path(str(path))
    return _make


@pytest.fixture
def config(tmp_path, raw_dir):
    return get_parameters({
        'Project': {
            'Name': 'CANN',
            'Raw': str(raw_dir),
            'BIDS': str(tmp_path / 'bids'),
            'Logs': str(tmp_path / 'logs'),
        },
        'BIDS': {},
    })
