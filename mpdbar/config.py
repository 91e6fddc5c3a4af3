"""
mpdbar Configuration - Constants, defaults and block config loading.
"""
import os
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

# ============================================
# BLOCK DEFAULTS
# ============================================

DEFAULT_INTERVAL = 1.0  # seconds between refreshes
DEFAULT_FORMAT = '{artist} - {title} [{playback_info}]{repeat}{random}{single}{consume}'
DEFAULT_IP = '127.0.0.1:6600'
DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 2.0  # socket timeout for every MPD call

# ============================================
# DISPLAY
# ============================================

BLOCK_NAME = 'Mpd'
BLOCK_ICON = 'music'
RECONNECTING_TEXT = 'reconnecting…'
UNKNOWN_ARTIST = 'unknown artist'

# One fixed letter per flag, in display order
FLAG_LETTERS = {
    'repeat': 'R',
    'random': 'Z',
    'single': 'S',
    'consume': 'C',
}

ICONS = {
    'music': '♪',
}

# ============================================
# VOLUME
# ============================================

VOLUME_STEP = 5

# ============================================
# LOGGING
# ============================================

LOG_LEVEL = os.environ.get('MPDBAR_LOG_LEVEL', 'INFO').upper()
LOG_DIR = Path(os.environ.get(
    'MPDBAR_LOG_DIR',
    Path(os.environ.get('XDG_CACHE_HOME', Path.home() / '.cache')) / 'mpdbar' / 'logs',
))
LOG_FILE = LOG_DIR / 'mpdbar.log'
LOG_MAX_BYTES = 1 * 1024 * 1024  # 1MB per file
LOG_BACKUP_COUNT = 3


@dataclass(frozen=True)
class BlockConfig:
    """Options recognised by the MPD block."""
    interval: float = DEFAULT_INTERVAL
    format: str = DEFAULT_FORMAT
    ip: str = DEFAULT_IP
    color_overrides: Optional[Dict[str, str]] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, raw: dict) -> 'BlockConfig':
        """Build a config from a parsed mapping, rejecting unknown keys."""
        if not isinstance(raw, dict):
            raise ConfigError('Block config must be a mapping')

        unknown = set(raw) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f'Unknown config option(s): {", ".join(sorted(unknown))}')

        return cls(
            interval=_positive_seconds(raw, 'interval', DEFAULT_INTERVAL),
            format=_string(raw, 'format', DEFAULT_FORMAT),
            ip=_string(raw, 'ip', DEFAULT_IP),
            color_overrides=_color_overrides(raw.get('color_overrides')),
            timeout=_positive_seconds(raw, 'timeout', DEFAULT_TIMEOUT),
        )


def _positive_seconds(raw: dict, key: str, default: float) -> float:
    value = raw.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f'{key!r} must be a number of seconds, got {value!r}')
    if value <= 0:
        raise ConfigError(f'{key!r} must be positive, got {value!r}')
    return float(value)


def _string(raw: dict, key: str, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f'{key!r} must be a string, got {value!r}')
    return value


def _color_overrides(value) -> Optional[Dict[str, str]]:
    if value is None:
        return None
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ConfigError('color_overrides must map color names to strings')
    return dict(value)


def load_config(path: Optional[Union[str, Path]] = None) -> BlockConfig:
    """Load block config from a JSON file. No path means all defaults."""
    if path is None:
        return BlockConfig()

    p = Path(os.path.expanduser(str(path)))
    try:
        raw = json.loads(p.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f'Could not read config {p}: {e}') from e

    config = BlockConfig.from_dict(raw)
    logger.debug(f'Loaded config from {p}: {config}')
    return config
