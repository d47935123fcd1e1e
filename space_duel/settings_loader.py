import json
import logging

from . import config as cfg

logger = logging.getLogger(__name__)

DEFAULTS = {
    'width': cfg.DEFAULT_WINDOW_WIDTH,
    'height': cfg.DEFAULT_WINDOW_HEIGHT,
    'fullscreen': False,
    'vsync': False,
}

def _parse_dimension(raw, default, key):
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        value = None
    if value is None or value <= 0:
        logger.warning("Setting %s=%r is not a valid size, using %d", key, raw, default)
        return default
    return value

def _parse_flag(raw, default, key):
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in ('true', '1', 'yes', 'on'):
        return True
    if text in ('false', '0', 'no', 'off'):
        return False
    logger.warning("Setting %s=%r is not a boolean, using %s", key, raw, default)
    return default

def parse_settings(data) -> dict:
    """
    Resolves raw settings values into the window settings the game uses.

    Args:
        data (dict): Raw key/values, e.g. {"WindowWidth": "1280", "EnableVSync": true}.

    Returns:
        dict: Keys 'width', 'height', 'fullscreen' and 'vsync'. Missing or
              malformed values fall back to DEFAULTS.
    """
    settings = dict(DEFAULTS)
    if 'WindowWidth' in data:
        settings['width'] = _parse_dimension(data['WindowWidth'], DEFAULTS['width'], 'WindowWidth')
    if 'WindowHeight' in data:
        settings['height'] = _parse_dimension(data['WindowHeight'], DEFAULTS['height'], 'WindowHeight')
    if 'FullScreen' in data:
        settings['fullscreen'] = _parse_flag(data['FullScreen'], DEFAULTS['fullscreen'], 'FullScreen')
    if 'EnableVSync' in data:
        settings['vsync'] = _parse_flag(data['EnableVSync'], DEFAULTS['vsync'], 'EnableVSync')
    return settings

def load_settings(filepath: str = cfg.SETTINGS_PATH) -> dict:
    """
    Loads window settings from a JSON file.

    Never fails: a missing or unreadable file gives the defaults, and bad
    individual values are replaced one by one.
    """
    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning("Settings file not found at %s, using defaults", filepath)
        return dict(DEFAULTS)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in settings file %s (%s), using defaults", filepath, e)
        return dict(DEFAULTS)
    except OSError as e:
        logger.warning("Could not read settings file %s (%s), using defaults", filepath, e)
        return dict(DEFAULTS)

    if not isinstance(data, dict):
        logger.warning("Settings file %s should contain an object, using defaults", filepath)
        return dict(DEFAULTS)
    return parse_settings(data)
