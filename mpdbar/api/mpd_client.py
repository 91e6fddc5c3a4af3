"""
MPD Client - Thin wrapper around python-mpd2 for the status block.
"""
import logging
from typing import Optional, Tuple

from mpd import MPDClient, MPDError

from ..config import DEFAULT_PORT, DEFAULT_TIMEOUT
from ..errors import PlayerConnectionError
from ..models import RemoteStatus, RemoteTrack
from ..utils import clamp_volume

logger = logging.getLogger(__name__)


def parse_address(address: str) -> Tuple[str, Optional[int]]:
    """Split "host:port" into its parts. Unix socket paths have no port."""
    if address.startswith('/'):
        return address, None

    host, sep, port = address.rpartition(':')
    if not sep:
        return address, DEFAULT_PORT
    if not port.isdigit():
        raise ValueError(f'Invalid MPD port in {address!r}')
    return host, int(port)


class MpdConnection:
    """One open connection to an MPD server."""

    def __init__(self, client: MPDClient, address: str):
        self.client = client
        self.address = address

    @classmethod
    def connect(cls, address: str, timeout: float = DEFAULT_TIMEOUT) -> 'MpdConnection':
        """Open a new connection, raising PlayerConnectionError on failure."""
        try:
            host, port = parse_address(address)
        except ValueError as e:
            raise PlayerConnectionError(str(e)) from e

        client = MPDClient()
        client.timeout = timeout
        try:
            client.connect(host, port)
        except (MPDError, OSError) as e:
            raise PlayerConnectionError(f'Could not connect to {address}: {e}') from e

        logger.debug(f'Connected to MPD {client.mpd_version} at {address}')
        return cls(client, address)

    def status(self) -> RemoteStatus:
        """Get current playback status."""
        try:
            return RemoteStatus.from_mpd(self.client.status())
        except (MPDError, OSError) as e:
            raise PlayerConnectionError(f'Status request failed: {e}') from e

    def current_song(self) -> Optional[RemoteTrack]:
        """Get the queued song, or None if the queue position is empty."""
        try:
            return RemoteTrack.from_mpd(self.client.currentsong())
        except (MPDError, OSError) as e:
            raise PlayerConnectionError(f'Current song request failed: {e}') from e

    def previous(self) -> bool:
        """Skip to previous track."""
        return self._command('previous')

    def next(self) -> bool:
        """Skip to next track."""
        return self._command('next')

    def toggle_pause(self) -> bool:
        """Toggle between paused and playing."""
        # "pause" without an argument toggles
        return self._command('pause')

    def set_volume(self, level: int) -> bool:
        """Set volume level (0-100)."""
        return self._command('setvol', clamp_volume(level))

    def _command(self, name: str, *args) -> bool:
        try:
            getattr(self.client, name)(*args)
            logger.debug(f'{name}{args or ""}: ok')
            return True
        except (MPDError, OSError) as e:
            logger.error(f'MPD command {name} failed: {e}')
            return False

    def close(self):
        """Say goodbye to the server and drop the socket."""
        try:
            self.client.close()
        except (MPDError, OSError):
            pass
        try:
            self.client.disconnect()
        except (MPDError, OSError) as e:
            logger.debug(f'Disconnect from {self.address} failed: {e}')
