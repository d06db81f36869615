RAW_EXTENSIONS = ['.fif']
HIDDEN_PREFIX = '._'
FILENAME_DELIMITER = '_'

SESSION_LABELS = ['v1', 'v2']
EMPTYROOM_SUBJECT = 'emptyroom'
NOISE_TASK = 'noise'
DATATYPE = 'meg'

DATE_FORMAT = '%Y%m%d'
ACQ_TIME_FORMAT = '%Y-%m-%dT%H:%M:%S'

SESSION_UNRESOLVED = 'session unresolved'
TASK_UNRESOLVED = 'task unresolved'

# Static MEG sidecar fields, REQUIRED/OPTIONAL as in the MEG-BIDS specification
MEG_SIDECAR_DEFAULTS = {
    'PowerLineFrequency': 50,
    'DewarPosition': 'upright',
    'SoftwareFilters': 'n/a',
    'DigitizedLandmarks': True,
    'DigitizedHeadPoints': True,
    'EOGChannelCount': 1,
    'ECGChannelCount': 1,
    'TriggerChannelCount': 1,
    'RecordingType': 'continuous',
    'ContinuousHeadLocalization': True,
    'HeadCoilFrequency': [293, 307, 314, 321, 328],
    'EEGChannelCount': 0,
    'ECOGChannelCount': 0,
    'SEEGChannelCount': 0,
    'EMGChannelCount': 0,
}

INSTITUTION_FIELDS = [
    'InstitutionName',
    'InstitutionAddress',
    'InstitutionalDepartmentName',
    'Manufacturer',
    'ManufacturersModelName',
]

DEFAULT_CONFIG = {
    'Name': 'CANN',
    'Root': '',
    'Raw': '',
    'BIDS': '',
    'Logs': '',
    'Problem_log': 'problem_files.txt',
    'Conversion_file': 'bids_conversion.tsv',
    'Extensions': RAW_EXTENSIONS,
    'overwrite': False,
    'InstitutionName': 'Swinburne University of Technology',
    'InstitutionAddress': 'ATC building, 427-451 Burwood Rd. Hawthorn, 3122, VIC, AUSTRALIA',
    'InstitutionalDepartmentName': 'Centre for Human Psychopharmacology / Swinburne Neuroimaging',
    'Manufacturer': 'Elekta/Neuromag',
    'ManufacturersModelName': 'TRIUX',
    'DatasetType': 'raw',
    'License': '',
    'Authors': ['David White', 'Brian Cornwell', 'Andrew Scholey (Swinburne Trial Site PI)'],
    'Acknowledgements': (
        'The authors acknowledge the facilities, and the scientific and technical assistance of the '
        'National Imaging Facility at the Swinburne University Neuroimaging Facility.'
    ),
    'Funding': [
        'The research was funded in part by Abbott Nutrition via a Center for Nutrition, Learning, and '
        'Memory (CNLM) grant to the University of Illinois, which in turn awarded a research grant to '
        'the authors through a competitive peer reviewed process.'
    ],
    'ReferencesAndLinks': ['https://www.ncbi.nlm.nih.gov/pmc/articles/PMC6222033/'],
    'MEG': MEG_SIDECAR_DEFAULTS,
}

# Conversion table field descriptions for user guidance
CONVERSION_TABLE_FIELDS = {
    'time_stamp': 'Date when entry was created (YYYYMMDD)',
    'status': 'Processing status: check=unresolved filename, run=ready to convert, processed=converted, error=converter failed',
    'problem': 'Reason the filename could not be resolved (session unresolved/task unresolved)',
    'participant': 'BIDS participant label (emptyroom for noise recordings)',
    'session': 'BIDS session label (v1/v2, or YYYYMMDD for noise recordings)',
    'task': 'BIDS task name',
    'run': 'BIDS run number',
    'category': 'Recording category resolved from the task token',
    'acq_time': 'Acquisition time taken from the file modification time',
    'associated_empty_room': 'Relative path to the empty room recording of the same date',
    'raw_path': 'Full path to source raw file directory',
    'raw_name': 'Source raw filename',
    'bids_path': 'Target BIDS directory path',
    'bids_name': 'Target BIDS filename',
}
