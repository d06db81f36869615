import os
from os.path import exists, join

from mne_bids import make_dataset_description


def create_dataset_description(config: dict):
    """
    Create or update BIDS dataset_description.json file with metadata.
    """
    bids_path = config.get('BIDS', '')
    os.makedirs(bids_path, exist_ok=True)

    file_bids = join(bids_path, 'dataset_description.json')

    if not exists(file_bids) or config.get('overwrite', False):
        make_dataset_description(
            path=bids_path,
            name=config.get('Name', 'CANN'),
            dataset_type=config.get('DatasetType', 'raw'),
            data_license=config.get('License') or None,
            authors=config.get('Authors') or None,
            acknowledgements=config.get('Acknowledgements') or None,
            funding=config.get('Funding') or None,
            references_and_links=config.get('ReferencesAndLinks') or None,
            doi=config.get('DatasetDOI') or None,
            overwrite=config.get('overwrite', False)
        )
        print(f"Writing {file_bids}")
    return file_bids
