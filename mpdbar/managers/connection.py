"""
Connection Manager - Owns the link to MPD and replaces it when it breaks.

States:
- 'connected': the last status probe succeeded
- 'reconnecting': the last probe failed; one reconnect attempt is made
  per call and the new connection is first probed on the following call.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

from ..config import DEFAULT_TIMEOUT
from ..errors import PlayerConnectionError
from ..models import RemoteStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Probe:
    """A usable connection plus the status its probe returned."""
    connection: Any
    status: RemoteStatus


class ConnectionManager:
    """Keeps a usable MPD connection, reconnecting at most once per call.

    Not thread-safe: callers must serialize access.
    """

    def __init__(self, address: str, connect: Callable[..., Any],
                 timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            address: "host:port" of the MPD server, reused on reconnect
            connect: Factory called as connect(address, timeout=...)
            timeout: Socket timeout passed to every new connection
        """
        self.address = address
        self.timeout = timeout
        self._connect = connect
        self.connection: Optional[Any] = None
        self.state: Literal['connected', 'reconnecting'] = 'reconnecting'
        self._failed_attempts = 0

    @property
    def connected(self) -> bool:
        return self.state == 'connected'

    def open(self):
        """Initial connection. Raises PlayerConnectionError on failure."""
        self.connection = self._connect(self.address, timeout=self.timeout)
        self.state = 'connected'
        logger.info(f'Connected to MPD at {self.address}')

    def ensure_usable(self) -> Optional[Probe]:
        """Probe the connection and return it with its status.

        Returns None when the probe failed or no connection was open; a
        reconnect has then been attempted and its result is probed on the
        next call. Never raises for connectivity problems.
        """
        if self.connection is not None:
            try:
                status = self.connection.status()
            except PlayerConnectionError as e:
                self._mark_broken(str(e))
            else:
                self._mark_connected()
                return Probe(self.connection, status)

        self._reconnect()
        return None

    def invalidate(self, reason: str):
        """Drop the connection after a failed query in the current cycle.

        Makes the same single reconnect attempt as a failed probe, so a
        new connection is probed on the next call.
        """
        self._mark_broken(reason)
        self._reconnect()

    def close(self):
        """Close the active connection, if any."""
        if self.connection is not None:
            self.connection.close()
            self.connection = None

    def _mark_connected(self):
        if self.state != 'connected':
            logger.info(f'CONNECTION RESTORED after {self._failed_attempts} failed attempts')
        self.state = 'connected'
        self._failed_attempts = 0

    def _mark_broken(self, reason: str):
        if self.state == 'connected':
            logger.warning(f'CONNECTION LOST to {self.address}: {reason}')
        self.state = 'reconnecting'
        self.close()

    def _reconnect(self):
        try:
            connection = self._connect(self.address, timeout=self.timeout)
        except PlayerConnectionError as e:
            self._failed_attempts += 1
            logger.debug(f'Reconnect attempt {self._failed_attempts} failed: {e}')
            return

        # Swap in the new handle; the old one is never reused
        self.connection = connection
        logger.debug(f'Reconnected to {self.address}, probing next cycle')
