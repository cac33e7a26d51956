# -*- coding: utf-8 -*-

"""Persistent settings of minipromise, stored in an ini file.

The file is ``minipromise.ini``, in the per-user config directory, with all
entries in a single ``[config]`` section:

    [config]
    request_timeout = 2.5
    max_workers = 8
    debug_mode = true
    log_levels = minipromise.network=hidebug;minipromise.promise=warning

Every entry has a type and a default value. Until ``load()`` is called, or
when an entry is absent from the file, ``get()`` returns the default.
``set()`` writes the whole file again.
"""

import configparser
import logging
import os.path

from . import path as minipromise_path

_logger = logging.getLogger(__name__)

_SECTION = 'config'

# name -> (type, default). Other names are rejected.
_default_config = {
    # Delay (in seconds) before a pending request is aborted. 0: no timeout.
    'request_timeout': (float, 0),
    'max_workers': (int, 4),
    'debug_mode': (bool, False),
    # logger name -> level, used by ``log.apply_config()``.
    'log_levels': (dict, {})
}

_config_parser = configparser.ConfigParser()
_config_parser.add_section(_SECTION)


def _get_config_file_path():
    return os.path.join(minipromise_path.get_config_dir(), 'minipromise.ini')


def _parse_dict(raw_value):
    """Parse a 'key=value;key2=value2' entry. Bad pairs are skipped."""
    result = {}
    for pair in filter(None, raw_value.split(';')):
        (name, sep, value) = pair.partition('=')
        if not sep or '=' in value:
            _logger.warning('Unable to parse pair key=value: "%s"', pair)
            continue
        result[name] = value
    return result


_readers = {
    bool: lambda key: _config_parser.getboolean(_SECTION, key),
    int: lambda key: _config_parser.getint(_SECTION, key),
    float: lambda key: _config_parser.getfloat(_SECTION, key),
    dict: lambda key: _parse_dict(_config_parser.get(_SECTION, key)),
}


def load():
    """Read the config file, if there is one."""
    config_file_path = _get_config_file_path()

    if not _config_parser.read(config_file_path):
        _logger.warning('Unable to load config file: %s', config_file_path)


def get(key):
    """Read a config entry, converted to its type.

    Args:
        key (str): entry name.
    Returns:
        The value from the config file, or the default one if the entry is
        not set or can't be converted.
    Raises:
        KeyError: unknown entry.
    """
    (entry_type, default) = _default_config[key]
    read = _readers.get(entry_type,
                        lambda key: _config_parser.get(_SECTION, key))
    try:
        return read(key)
    except configparser.NoOptionError:
        return default
    except ValueError:
        _logger.warning('Invalid value for config entry "%s". The default '
                        'value will be used.', key)
        return default


def set(key, value):
    """Change a config entry, and save the config file.

    A value of None removes the entry, so its default applies again.

    Raises:
        KeyError: unknown entry.
    """
    if key not in _default_config:
        raise KeyError(key)
    if value is None:
        _config_parser.remove_option(_SECTION, key)
    else:
        _config_parser.set(_SECTION, key, str(value))

    try:
        with open(_get_config_file_path(), 'w') as config_file:
            _config_parser.write(config_file)
    except IOError:
        _logger.warning('Unable to write in the config file', exc_info=True)
    else:
        _logger.debug('Config file modified.')
