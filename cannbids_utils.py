import json
import os
import yaml
from copy import deepcopy
from os.path import basename, dirname, isabs, join

from cannbids_constants import DEFAULT_CONFIG


def setLogPath(config: dict = None, LogPath: str = None):
    """
    Check config and set preferred logging location.
    LogPath overrides config setting if provided.
    """
    if LogPath:
        os.makedirs(LogPath, exist_ok=True)
        return LogPath

    config = config or {}
    log_path = config.get('Logs') or ''

    if not log_path:
        project_name = config.get('Name', '') or ''
        root = config.get('Root', '') or ''
        path_BIDS = config.get('BIDS', '') or ''

        if root:
            # Check project root and name to not duplicate project name
            project_root = join(root, project_name) if project_name != basename(root) else root
            log_path = join(project_root, 'logs')
        elif path_BIDS:
            log_path = join(dirname(os.path.abspath(path_BIDS)), 'logs')
        else:
            log_path = './logs'
            print(f"[WARN] Log path missing; falling back to log path: {log_path}")

    os.makedirs(log_path, exist_ok=True)
    return log_path


def problem_log_path(config: dict):
    """
    Resolve the problem log location. Relative names are placed in the raw directory.
    """
    problem_log = config.get('Problem_log') or DEFAULT_CONFIG['Problem_log']
    if isabs(problem_log):
        return problem_log
    return join(config.get('Raw', '') or '.', problem_log)


def log_problem_file(problem_log: str, file_name: str, kind: str):
    """
    Append an unresolved filename to the problem log. The file is opened and
    closed for every entry so an interrupted batch never leaves a partial write.
    """
    os.makedirs(dirname(problem_log) or '.', exist_ok=True)
    with open(problem_log, 'a') as f:
        f.write(f"{file_name}\t{kind}\n")


def get_parameters(config):
    """
    Extract and merge configuration parameters from file or dictionary.

    The Project and BIDS sections are flattened on top of DEFAULT_CONFIG; the MEG
    sidecar section is merged key by key so a config may override single fields.
    """
    if isinstance(config, str):
        if config.endswith('.json'):
            with open(config, 'r') as f:
                config_dict = json.load(f)
        elif config.endswith('.yml') or config.endswith('.yaml'):
            with open(config, 'r') as f:
                config_dict = yaml.safe_load(f)
        else:
            raise ValueError("Unsupported configuration file format. Use .json or .yml/.yaml")
    elif isinstance(config, dict):
        config_dict = deepcopy(config)
    else:
        raise ValueError("Unsupported configuration type. Use dict or file path")

    config_dict = config_dict or {}
    project = deepcopy(config_dict.get('Project') or {})
    bids = deepcopy(config_dict.get('BIDS') or {})

    bids_dict = deepcopy(DEFAULT_CONFIG) | project | bids
    bids_dict['MEG'] = deepcopy(DEFAULT_CONFIG['MEG']) | (bids.get('MEG') or {})

    if isinstance(bids_dict.get('Extensions'), str):
        bids_dict['Extensions'] = [e.strip() for e in bids_dict['Extensions'].split(',') if e.strip()]

    return bids_dict
