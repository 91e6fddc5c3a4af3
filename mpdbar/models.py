"""
mpdbar Data Models - Snapshots of MPD state and bar input events.
"""
from dataclasses import dataclass
from typing import Optional, Literal

PlayState = Literal['play', 'pause', 'stop']
MouseButton = Literal['left', 'middle', 'right', 'wheel_up', 'wheel_down', 'other']

# i3bar button numbers
I3BAR_BUTTONS = {
    1: 'left',
    2: 'middle',
    3: 'right',
    4: 'wheel_up',
    5: 'wheel_down',
}


def _to_float(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _enabled(value) -> bool:
    # MPD sends '0'/'1', single and consume may also be 'oneshot'
    return value is not None and str(value) != '0'


@dataclass(frozen=True)
class RemoteStatus:
    """Playback status as reported by MPD's `status` command."""
    repeat: bool = False
    random: bool = False
    single: bool = False
    consume: bool = False
    state: PlayState = 'stop'
    elapsed: Optional[float] = None
    volume: int = 0

    @property
    def playing(self) -> bool:
        return self.state == 'play'

    @property
    def paused(self) -> bool:
        return self.state == 'pause'

    @classmethod
    def from_mpd(cls, raw: dict) -> 'RemoteStatus':
        """Parse the string mapping returned by MPDClient.status()."""
        state = raw.get('state')
        if state not in ('play', 'pause', 'stop'):
            state = 'stop'

        elapsed = _to_float(raw.get('elapsed'))
        if elapsed is None and raw.get('time'):
            # Older servers only send 'time' as "elapsed:total"
            elapsed = _to_float(str(raw['time']).split(':')[0])

        return cls(
            repeat=_enabled(raw.get('repeat')),
            random=_enabled(raw.get('random')),
            single=_enabled(raw.get('single')),
            consume=_enabled(raw.get('consume')),
            state=state,
            elapsed=elapsed,
            # -1 means the server has no mixer
            volume=max(0, min(100, _to_int(raw.get('volume')))),
        )


@dataclass(frozen=True)
class RemoteTrack:
    """The currently queued song as reported by `currentsong`."""
    file: str
    title: Optional[str] = None
    artist: Optional[str] = None
    duration: Optional[float] = None

    @classmethod
    def from_mpd(cls, raw: dict) -> Optional['RemoteTrack']:
        """Parse MPDClient.currentsong(). Returns None when nothing is queued."""
        if not raw:
            return None

        artist = raw.get('artist')
        if isinstance(artist, list):
            artist = ', '.join(artist)

        title = raw.get('title')
        if isinstance(title, list):
            title = title[0]

        duration = _to_float(raw.get('duration'))
        if duration is None:
            duration = _to_float(raw.get('time'))

        return cls(
            file=raw.get('file', ''),
            title=title,
            artist=artist,
            duration=duration,
        )


@dataclass(frozen=True)
class ClickEvent:
    """A pointer event delivered by the status bar."""
    name: Optional[str]
    button: MouseButton = 'other'
    instance: Optional[str] = None

    @classmethod
    def from_i3bar(cls, data: dict) -> 'ClickEvent':
        """Build an event from one element of the i3bar click stream."""
        return cls(
            name=data.get('name'),
            button=I3BAR_BUTTONS.get(_to_int(data.get('button'), default=-1), 'other'),
            instance=data.get('instance'),
        )
