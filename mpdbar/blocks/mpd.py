"""
MPD Block - Shows the current song and playback flags of an MPD server.

The scheduler calls update() on a timer and click() for bar events.
Both are blocking and must never run concurrently on the same block.
"""
import logging
from typing import Callable, List, Optional

from ..api import MpdConnection
from ..config import BLOCK_ICON, BLOCK_NAME, RECONNECTING_TEXT, BlockConfig
from ..errors import BlockError, PlayerConnectionError
from ..handlers.clicks import dispatch_click
from ..managers import ConnectionManager
from ..models import ClickEvent
from ..ui.fields import derive_fields
from ..ui.template import FormatTemplate, TemplateError
from ..ui.widget import ButtonWidget
from ..utils import pseudo_uuid

logger = logging.getLogger(__name__)


class MpdBlock:
    """Status bar block for a single MPD server."""

    def __init__(self, config: Optional[BlockConfig] = None,
                 connect: Callable[..., MpdConnection] = MpdConnection.connect):
        """
        Args:
            config: Block options (defaults when omitted)
            connect: Connection factory, called as connect(address, timeout=...)

        Raises:
            BlockError: if the format is invalid or MPD cannot be reached
        """
        config = config or BlockConfig()
        self.id = pseudo_uuid()
        self.update_interval = config.interval

        try:
            self.format = FormatTemplate.from_string(config.format)
        except TemplateError as e:
            raise BlockError(BLOCK_NAME, f'Invalid format for mpd format: {e}') from e

        self.connection = ConnectionManager(config.ip, connect, timeout=config.timeout)
        try:
            self.connection.open()
        except PlayerConnectionError as e:
            raise BlockError(BLOCK_NAME, f'Could not connect to MPD at {config.ip}: {e}') from e

        self.widget = ButtonWidget(self.id, BLOCK_NAME, BLOCK_ICON, config.color_overrides)

    @property
    def text(self) -> str:
        """Last rendered text."""
        return self.widget.text

    def update(self) -> float:
        """Refresh the text from MPD. Returns seconds until the next update."""
        probe = self.connection.ensure_usable()
        if probe is None:
            self.widget.set_text(RECONNECTING_TEXT)
            return self.update_interval

        try:
            track = probe.connection.current_song()
        except PlayerConnectionError as e:
            self.connection.invalidate(str(e))
            self.widget.set_text(RECONNECTING_TEXT)
            return self.update_interval

        values = derive_fields(probe.status, track)
        self.widget.set_text(self.format.render(values))
        return self.update_interval

    def click(self, event: ClickEvent):
        """Run the command bound to a click on this block, then re-render.

        Events for other blocks are ignored. Raises BlockError if the
        command fails; the text is refreshed either way.
        """
        if event.name != self.id:
            return

        try:
            connection = self.connection.connection
            if connection is None:
                raise BlockError(BLOCK_NAME, 'Not connected to MPD')
            dispatch_click(connection, event.button)
        finally:
            self.update()

    def view(self) -> List[ButtonWidget]:
        return [self.widget]

    def close(self):
        self.connection.close()
        logger.info('MPD block closed')
