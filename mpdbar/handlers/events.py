"""
Event Listener - Reads i3bar click events from stdin.
"""
import json
import logging
import threading
from typing import Callable, Optional, TextIO

from ..models import ClickEvent

logger = logging.getLogger(__name__)


class EventListener:
    """Reads the i3bar click stream in a background thread."""

    def __init__(self, stream: TextIO, on_event: Callable[[ClickEvent], None]):
        """
        Initialize event listener.

        Args:
            stream: Text stream carrying the click events (usually stdin)
            on_event: Callback for each parsed click event
        """
        self.stream = stream
        self.on_event = on_event
        self.thread: Optional[threading.Thread] = None
        self.running = False

    def start(self):
        """Start listening for events in background thread."""
        self.running = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()
        logger.info('Started click event listener')

    def stop(self):
        """Stop delivering events.

        The reader thread is not joined: it may be blocked reading stdin,
        so it is a daemon thread left to end with the process. Lines read
        after stop() are dropped.
        """
        self.running = False
        logger.info('Stopped click event listener')

    def _run(self):
        """Main loop - one event per line until EOF or stop()."""
        for line in self.stream:
            if not self.running:
                break
            self._on_line(line)
        logger.debug('Click event stream closed')

    def _on_line(self, line: str):
        """Parse one line of the stream: '[', or an event with optional leading ','."""
        line = line.strip().lstrip(',').strip()
        if not line or line == '[':
            return
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f'Error parsing click event {line!r}: {e}')
            return
        if not isinstance(data, dict):
            logger.warning(f'Ignoring non-object click event: {line!r}')
            return

        self.on_event(ClickEvent.from_i3bar(data))
