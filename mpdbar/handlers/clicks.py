"""
Click Commands - Maps bar clicks on the MPD block to transport commands.

    left        previous track
    middle      toggle pause/play
    right       next track
    wheel up    volume + VOLUME_STEP (max 100)
    wheel down  volume - VOLUME_STEP (min 0)
"""
import logging

from ..config import BLOCK_NAME, VOLUME_STEP
from ..errors import BlockError, PlayerConnectionError
from ..models import MouseButton
from ..utils import clamp_volume

logger = logging.getLogger(__name__)

TRANSPORT_COMMANDS = {
    'left': ('previous', 'Failed to go to previous track'),
    'middle': ('toggle_pause', 'Failed to toggle pause'),
    'right': ('next', 'Failed to go to next track'),
}

VOLUME_STEPS = {
    'wheel_up': VOLUME_STEP,
    'wheel_down': -VOLUME_STEP,
}


def dispatch_click(connection, button: MouseButton):
    """Issue the command bound to `button`. Raises BlockError if it fails."""
    if button in TRANSPORT_COMMANDS:
        method, error = TRANSPORT_COMMANDS[button]
        logger.info(f'Click {button}: {method}')
        if not getattr(connection, method)():
            raise BlockError(BLOCK_NAME, error)

    elif button in VOLUME_STEPS:
        change_volume(connection, VOLUME_STEPS[button])

    else:
        logger.debug(f'Click {button}: no command bound')


def change_volume(connection, delta: int) -> int:
    """Re-read the current volume and move it by `delta`, clamped to 0-100."""
    try:
        current = connection.status().volume
    except PlayerConnectionError as e:
        raise BlockError(BLOCK_NAME, 'Failed to read mpd volume') from e

    level = clamp_volume(current + delta)
    logger.info(f'Volume: {current}% -> {level}%')
    if not connection.set_volume(level):
        raise BlockError(BLOCK_NAME, 'Failed to adjust mpd volume')
    return level
