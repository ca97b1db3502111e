# -*- coding: utf-8 -*-
import collections
import json
import os
from .constants import (
    ERR_CONFIG_FILE_DOES_NOT_EXIST, ERR_CONFIG_FILE_UNREADABLE,
    ERR_CONFIG_INVALID_JSON, ERR_CONFIG_MISSING_KEY, ERR_CONFIG_NOT_AN_OBJECT,
    ERR_CONFIG_WRONG_TYPE)
from .durations import RetentionWindow
from .exceptions import ConfigError
from .remote import SshCredentials


class BackupRunConfig(collections.namedtuple('BackupRunConfig', [
        'source', 'destination', 'exclude_file', 'log_file', 'snapshot',
        'snapshot_suffix', 'ssh_credentials', 'policy'])):
    """Everything one backup cycle needs. Read once, never modified.

    ``snapshot`` is the snapshot root directory on the remote host and
    ``policy`` a tuple of ``RetentionWindow``.
    """
    __slots__ = ()


STRING_KEYS = ('source', 'destination', 'exclude_file', 'log_file',
               'snapshot', 'snapshot_suffix')

CREDENTIAL_KEYS = ('user', 'id_file', 'host')


def read_config(path):
    """Loads a ``BackupRunConfig`` from the JSON file at ``path``.

    :raises: ConfigError
    """
    path = os.path.expanduser(path)

    if not os.path.exists(path):
        raise ConfigError(ERR_CONFIG_FILE_DOES_NOT_EXIST.format(path))

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except ValueError as e:
        raise ConfigError(ERR_CONFIG_INVALID_JSON.format(path, e)) from e
    except OSError as e:
        raise ConfigError(ERR_CONFIG_FILE_UNREADABLE.format(path, e)) from e

    return config_from_dict(data, path)


def config_from_dict(data, path='<config>'):
    """Builds a ``BackupRunConfig`` from already parsed JSON.

    :param path: Only used in error messages.
    :raises: ConfigError
    """
    if not isinstance(data, dict):
        raise ConfigError(ERR_CONFIG_NOT_AN_OBJECT.format(path))

    values = {key: _get(data, key, str, 'a string', path)
              for key in STRING_KEYS}

    creds = _get(data, 'ssh_credentials', dict, 'an object', path)
    values['ssh_credentials'] = SshCredentials(**{
        key: _get(creds, key, str, 'a string', path,
                  'ssh_credentials.' + key)
        for key in CREDENTIAL_KEYS})

    policy = _get(data, 'policy', list, 'a list', path)
    windows = []
    for idx, entry in enumerate(policy):
        if not isinstance(entry, dict):
            raise ConfigError(ERR_CONFIG_WRONG_TYPE.format(
                path, 'policy[{}]'.format(idx), 'an object'))
        windows.append(RetentionWindow.from_dict(entry))
    values['policy'] = tuple(windows)

    return BackupRunConfig(**values)


def _get(data, key, type_, type_name, path, label=None):
    label = label or key
    if key not in data:
        raise ConfigError(ERR_CONFIG_MISSING_KEY.format(path, label))

    value = data[key]
    if not isinstance(value, type_):
        raise ConfigError(ERR_CONFIG_WRONG_TYPE.format(path, label, type_name))

    return value
