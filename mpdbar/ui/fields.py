"""
Status Fields - Turns MPD status and track data into placeholder values.

Each field has its own small fallback table so one missing tag only
blanks that field, never the whole block:

    field          no track   tag missing        tag present
    title          ""         file name          title
    artist         ""         "unknown artist"   artist
    length         ""         ""                 m:ss
"""
import logging
from typing import Callable, Dict, Optional

from ..config import FLAG_LETTERS, UNKNOWN_ARTIST
from ..models import RemoteStatus, RemoteTrack

logger = logging.getLogger(__name__)

FIELD_NAMES = (
    'repeat', 'random', 'single', 'consume',
    'title', 'artist', 'elapsed', 'length',
    'playback_info', 'volume',
)


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds as m:ss, e.g. 125 -> "2:05". None -> ""."""
    if seconds is None:
        return ''
    total = int(seconds)
    return f'{total // 60}:{total % 60:02d}'


def flag_text(name: str, enabled: bool) -> str:
    """Display letter for a playback flag, empty when the flag is off."""
    return FLAG_LETTERS[name] if enabled else ''


def title_text(track: Optional[RemoteTrack]) -> str:
    if track is None:
        return ''
    if track.title is None:
        return track.file
    return track.title


def artist_text(track: Optional[RemoteTrack]) -> str:
    if track is None:
        return ''
    if track.artist is None:
        return UNKNOWN_ARTIST
    return track.artist


def length_text(track: Optional[RemoteTrack]) -> str:
    if track is None:
        return ''
    return format_duration(track.duration)


def playback_info(state: str, elapsed: str, length: str) -> str:
    if state == 'play':
        return f'{elapsed}/{length}'
    if state == 'pause':
        return 'paused'
    return 'stopped'


def volume_text(status: RemoteStatus) -> str:
    return str(status.volume)


def _safe(name: str, derive: Callable[[], str]) -> str:
    try:
        return derive()
    except Exception as e:
        logger.warning(f'Could not derive {name!r}: {e}', exc_info=True)
        return ''


def derive_fields(status: RemoteStatus, track: Optional[RemoteTrack]) -> Dict[str, str]:
    """Compute every placeholder value for one render pass."""
    fields = {
        flag: _safe(flag, lambda flag=flag: flag_text(flag, getattr(status, flag)))
        for flag in FLAG_LETTERS
    }
    fields['title'] = _safe('title', lambda: title_text(track))
    fields['artist'] = _safe('artist', lambda: artist_text(track))
    fields['elapsed'] = _safe('elapsed', lambda: format_duration(status.elapsed))
    fields['length'] = _safe('length', lambda: length_text(track))
    fields['playback_info'] = _safe(
        'playback_info',
        lambda: playback_info(status.state, fields['elapsed'], fields['length']),
    )
    fields['volume'] = _safe('volume', lambda: volume_text(status))
    return fields
