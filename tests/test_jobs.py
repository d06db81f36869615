from datetime import datetime

import pytest

from cannbids_jobs import SessionUnresolved, SubjectUnresolved, TaskUnresolved, build_job


def test_first_rest(make_raw_file, config):
    job = build_job(make_raw_file('001_rest1_v1.fif'), config)
    assert job.category == 'first-rest'
    assert job.subject == '001'
    assert job.session == 'v1'
    assert job.task == 'rest'
    assert job.run == 1
    assert job.acq_time == datetime(2021, 5, 22, 10, 30, 0)
    assert job.acq_time_label() == '2021-05-22T10:30:00'
    assert job.associated_empty_room == (
        'sub-emptyroom/ses-20210522/meg/sub-emptyroom_ses-20210522_task-noise_meg.fif'
    )


def test_second_watermaze_upper_case(make_raw_file, config):
    job = build_job(make_raw_file('002_WATERMAZE2_V2.fif'), config)
    assert job.category == 'navigation-task-run-2'
    assert job.subject == '002'
    assert job.session == 'v2'
    assert job.run == 2


def test_empty_room_overrides_identity(make_raw_file, config):
    job = build_job(make_raw_file('003_empty_anything.fif'), config)
    assert job.category == 'background-noise-reference'
    assert job.subject == 'emptyroom'
    assert job.session == '20210522'
    assert job.task == 'noise'
    assert job.run is None
    assert job.associated_empty_room is None
    assert 'AssociatedEmptyRoom' not in job.sidecar_entries()


def test_unknown_task(make_raw_file, config):
    with pytest.raises(TaskUnresolved) as excinfo:
        build_job(make_raw_file('004_nap_v1.fif'), config)
    assert excinfo.value.filename == '004_nap_v1.fif'
    assert excinfo.value.kind == 'task unresolved'
    assert 'unable to determine task' in str(excinfo.value)


def test_unknown_session(make_raw_file, config):
    with pytest.raises(SessionUnresolved) as excinfo:
        build_job(make_raw_file('005_rest1_v3.fif'), config)
    assert excinfo.value.kind == 'session unresolved'


@pytest.mark.parametrize('name, error', [
    ('006_rest1.fif', SessionUnresolved),
    ('007_rest1_v1_copy.fif', SessionUnresolved),
    ('008.fif', TaskUnresolved),
    ('009_nap_v9.fif', TaskUnresolved),
    ('_rest1_v1.fif', SubjectUnresolved),
    ('00-1_rest1_v1.fif', SubjectUnresolved),
])
def test_malformed_names(make_raw_file, config, name, error):
    with pytest.raises(error):
        build_job(make_raw_file(name), config)


def test_case_insensitive(make_raw_file, config):
    lower = build_job(make_raw_file('001_rest1_v1.fif'), config)
    upper = build_job(make_raw_file('001_REST1_V1.FIF'), config)
    assert (lower.category, lower.run, lower.session) == (upper.category, upper.run, upper.session)


def test_subject_case_preserved(make_raw_file, config):
    assert build_job(make_raw_file('Ab01_rest2_v2.fif'), config).subject == 'Ab01'


def test_jobs_are_reproducible(make_raw_file, config):
    raw_file = make_raw_file('001_watermaze1_v1.fif')
    assert build_job(raw_file, config) == build_job(raw_file, config)


def test_empty_room_does_not_leak(make_raw_file, config):
    build_job(make_raw_file('003_empty_v1.fif'), config)
    job = build_job(make_raw_file('003_rest2_v1.fif'), config)
    assert job.subject == '003'
    assert job.session == 'v1'
    assert job.task == 'restbreak'


def test_same_date_links_same_empty_room(make_raw_file, config):
    first = build_job(make_raw_file('001_rest1_v1.fif', datetime(2021, 5, 22, 9, 0)), config)
    second = build_job(make_raw_file('002_watermaze1_v2.fif', datetime(2021, 5, 22, 16, 0)), config)
    assert first.associated_empty_room == second.associated_empty_room


def test_sidecar_entries(make_raw_file, config):
    job = build_job(make_raw_file('001_rest1_v1.fif'), config)
    entries = job.sidecar_entries()
    assert entries['InstitutionName'] == 'Swinburne University of Technology'
    assert entries['Manufacturer'] == 'Elekta/Neuromag'
    assert entries['PowerLineFrequency'] == 50
    assert entries['HeadCoilFrequency'] == [293, 307, 314, 321, 328]
    assert entries['TaskName'] == 'rest'
    assert entries['CogAtlasID'] == 'http://www.cognitiveatlas.org/task/id/trm_4c8a834779883/'
    assert entries['AssociatedEmptyRoom'] == job.associated_empty_room


def test_sidecar_entries_follow_config(make_raw_file, config):
    config['MEG'] = config['MEG'] | {'PowerLineFrequency': 60}
    config['InstitutionName'] = 'Elsewhere'
    entries = build_job(make_raw_file('001_rest1_v1.fif'), config).sidecar_entries()
    assert entries['PowerLineFrequency'] == 60
    assert entries['InstitutionName'] == 'Elsewhere'


def test_bids_path(make_raw_file, config):
    bids_path = build_job(make_raw_file('001_watermaze2_V1.fif'), config).bids_path()
    assert bids_path.subject == '001'
    assert bids_path.session == 'v1'
    assert bids_path.task == 'watermaze'
    assert bids_path.run == '02'
    assert bids_path.datatype == 'meg'
    assert str(bids_path.root) == config['BIDS']


def test_invalid_subject_label(make_raw_file, config):
    with pytest.raises(SubjectUnresolved) as excinfo:
        build_job(make_raw_file('00-1_rest1_v1.fif'), config)
    assert excinfo.value.kind == 'subject unresolved'
    assert excinfo.value.filename == '00-1_rest1_v1.fif'


def test_overwrite_follows_config(make_raw_file, config):
    raw_file = make_raw_file('001_rest1_v1.fif')
    assert build_job(raw_file, config).overwrite is False
    config['overwrite'] = True
    assert build_job(raw_file, config).overwrite is True
