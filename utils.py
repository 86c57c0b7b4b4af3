"""
Configuration and logging for the magnet playground.

config.json is optional: every section falls back to the values in
constants.py, and the sections that are present are checked key by key
before anything is built from them.
"""
import json
import logging
import logging.handlers
import os

import constants

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = os.path.join('logs', 'magnets.log')

DEFAULT_SIMULATION = {
    'pull_radius': constants.PULL_RADIUS,
    'step_size': constants.STEP_SIZE,
    'drag_threshold': constants.DRAG_THRESHOLD,
    'particles_draggable': False,
    'strict': False,
}

DEFAULT_RUN_CONTROL = {
    'log_throttle_ticks': constants.LOG_THROTTLE_TICKS,
    'control_panel': True,
}


def load_config(path, required=False):
    """
    Read the JSON configuration at `path`.

    A missing optional file means "use the defaults" and gives {}.
    Malformed JSON propagates as json.JSONDecodeError.
    """
    if not os.path.exists(path):
        if required:
            raise FileNotFoundError(f"configuration file not found: {path}")
        logging.info(f"No configuration at {path}; using built-in defaults.")
        return {}

    with open(path, 'r') as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"{path}: expected a JSON object at the top level")
    logging.info(f"Configuration loaded from {path}.")
    return config


def setup_logging(config):
    """
    Send log records to the console and to a rotating file
    (1MB, 5 backups), as set in the "logging" section of `config`.
    """
    section = config.get('logging', {})
    level = str(section.get('level', 'INFO')).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {section.get('level')!r}")
    formatter = logging.Formatter(section.get('format', DEFAULT_LOG_FORMAT))
    log_file = section.get('log_file', DEFAULT_LOG_FILE)

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    for handler in (logging.StreamHandler(),
                    logging.handlers.RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=5)):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.debug(f"Logging at {level} to the console and {log_file}.")


def _section(config, name, defaults):
    section = config.get(name, {})
    unknown = set(section) - set(defaults)
    if unknown:
        raise ValueError(f"unknown {name} settings: {sorted(unknown)}")
    settings = dict(defaults)
    settings.update(section)
    return settings


def _require_bool(settings, key, section):
    # json "false" arrives as a string and bool("false") is True
    if not isinstance(settings[key], bool):
        raise ValueError(f"{section}.{key} must be true or false, got {settings[key]!r}")


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def simulation_settings(config):
    """The "simulation" section merged over the defaults."""
    settings = _section(config, 'simulation', DEFAULT_SIMULATION)
    for key in ('pull_radius', 'step_size', 'drag_threshold'):
        if not _is_number(settings[key]) or settings[key] < 0:
            raise ValueError(f"simulation.{key} must be a non-negative number, got {settings[key]!r}")
        settings[key] = float(settings[key])
    _require_bool(settings, 'particles_draggable', 'simulation')
    _require_bool(settings, 'strict', 'simulation')
    return settings


def run_settings(config):
    """The "run_control" section merged over the defaults."""
    settings = _section(config, 'run_control', DEFAULT_RUN_CONTROL)
    throttle = settings['log_throttle_ticks']
    if not isinstance(throttle, int) or isinstance(throttle, bool) or throttle <= 0:
        raise ValueError(f"run_control.log_throttle_ticks must be a positive integer, got {throttle!r}")
    _require_bool(settings, 'control_panel', 'run_control')
    return settings
