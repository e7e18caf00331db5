"""
Configuration loader for FileSorter.

Loads config.json from the config/ directory (or an explicit path), merges
it over the built-in defaults and validates the result. Relative directory
paths are resolved against the current working directory.
"""

import json
import os

from filesorter.exceptions import ConfigError


# Project root (parent of filesorter/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_DIR = os.path.join(BASE_DIR, 'config')
DEFAULT_CONFIG_PATH = os.path.join(CONFIG_DIR, 'config.json')

LOG_TARGETS = ('stdout', 'stderr', 'file')

DEFAULT_CONFIG = {
    'unsorted_dir': 'FilesToSort',
    'sorted_dir': 'SortedFiles',
    'log_target': 'stdout',
    'log_file': 'Sorting.log',
    'debug': True,
    'log_max_bytes': 5242880,
    'log_backup_count': 5,
    'ready_timeout_ms': 10000,
    'ready_poll_interval_ms': 200,
    'exit_on_error': True,
    'scan_existing_on_startup': False,
}

_BOOL_KEYS = ('debug', 'exit_on_error', 'scan_existing_on_startup')
_POSITIVE_INT_KEYS = ('log_max_bytes', 'ready_timeout_ms', 'ready_poll_interval_ms')

_config_cache = None


def load_config(config_path=None):
    """Load runtime configuration.

    Args:
        config_path: Optional path to a custom config file. If None, loads
                     config/config.json and falls back to the defaults when
                     that file does not exist.

    Returns:
        dict: Validated configuration with every key of DEFAULT_CONFIG.

    Raises:
        ConfigError: If an explicit file is missing, the JSON is malformed,
                     or a value has the wrong type.
    """
    global _config_cache
    explicit = config_path is not None
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config = dict(DEFAULT_CONFIG)
    if explicit or os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {config_path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config root must be an object: {config_path}")
        config.update(loaded)

    validate_config(config)
    _config_cache = config
    return config


def get_config():
    """Return the last loaded configuration, loading the default one if needed."""
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def validate_config(config):
    """Check value types and ranges, raising ConfigError on the first problem."""
    for key in ('unsorted_dir', 'sorted_dir'):
        if not isinstance(config.get(key), str) or not config[key]:
            raise ConfigError(f"'{key}' must be a non-empty string")

    if config.get('log_target') not in LOG_TARGETS:
        raise ConfigError(
            f"'log_target' must be one of {', '.join(LOG_TARGETS)}, "
            f"got {config.get('log_target')!r}"
        )
    # A file target without a name logs to the default file
    if config['log_target'] == 'file' and not config.get('log_file'):
        config['log_file'] = DEFAULT_CONFIG['log_file']

    for key in _BOOL_KEYS:
        if not isinstance(config.get(key), bool):
            raise ConfigError(f"'{key}' must be true or false")

    for key in _POSITIVE_INT_KEYS:
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"'{key}' must be a positive integer")

    backups = config.get('log_backup_count')
    if isinstance(backups, bool) or not isinstance(backups, int) or backups < 0:
        raise ConfigError("'log_backup_count' must be a non-negative integer")


def get_unsorted_dir(config=None):
    """Absolute path of the watched directory."""
    config = config or get_config()
    return os.path.abspath(os.path.expanduser(config['unsorted_dir']))


def get_sorted_dir(config=None):
    """Absolute path of the sorted destination root."""
    config = config or get_config()
    return os.path.abspath(os.path.expanduser(config['sorted_dir']))


def ensure_directories(config=None):
    """Create the sorted destination root if it doesn't exist.

    Returns:
        str: The absolute sorted directory path.
    """
    sorted_dir = get_sorted_dir(config)
    os.makedirs(sorted_dir, exist_ok=True)
    return sorted_dir
