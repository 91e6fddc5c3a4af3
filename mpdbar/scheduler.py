"""
Scheduler - Runs block updates on their timers and delivers click events.

Everything that touches a block happens on the thread calling run(), so
blocks never see concurrent update()/click() calls. Other threads only
hand events over through push_event().
"""
import time
import heapq
import queue
import logging
import itertools
from typing import List, Optional

from .errors import BlockError
from .models import ClickEvent
from .ui.output import BarWriter

logger = logging.getLogger(__name__)


class Scheduler:
    """Single-threaded timer and event loop for a list of blocks."""

    def __init__(self, blocks: List, writer: BarWriter):
        self.blocks = blocks
        self.writer = writer
        # put() must be reentrant: stop() runs in signal handlers
        self.events: 'queue.SimpleQueue[Optional[ClickEvent]]' = queue.SimpleQueue()
        self.running = False
        self._order = itertools.count()  # tie-breaker for equal wake-up times
        now = time.monotonic()
        self._due = [(now, next(self._order), block) for block in blocks]
        heapq.heapify(self._due)

    def push_event(self, event: ClickEvent):
        """Queue a click event. Safe to call from any thread."""
        self.events.put(event)

    def run(self):
        """Loop until stop() is called, then close all blocks."""
        self.running = True
        self.writer.start()
        try:
            while self.running:
                self.run_once()
        finally:
            for block in self.blocks:
                block.close()

    def stop(self):
        self.running = False
        # Wake the loop if it is waiting for events
        self.events.put(None)

    def run_once(self, max_wait: Optional[float] = None):
        """Wait for the next event or due update and handle it."""
        timeout = self._time_until_due()
        if max_wait is not None:
            timeout = min(timeout, max_wait)

        try:
            event = self.events.get(timeout=max(0.0, timeout))
        except queue.Empty:
            event = None

        if event is not None:
            self._dispatch(event)
        self._update_due()

    def _time_until_due(self) -> float:
        if not self._due:
            return 1.0
        return self._due[0][0] - time.monotonic()

    def _update_due(self):
        now = time.monotonic()
        updated = False
        while self._due and self._due[0][0] <= now:
            _, _, block = heapq.heappop(self._due)
            interval = self._safe_update(block)
            heapq.heappush(self._due, (now + interval, next(self._order), block))
            updated = True
        if updated:
            self._emit()

    def _safe_update(self, block) -> float:
        try:
            return block.update()
        except Exception:
            logger.error(f'Update of block {block.id} failed', exc_info=True)
            return getattr(block, 'update_interval', 1.0)

    def _dispatch(self, event: ClickEvent):
        logger.debug(f'Click event: {event}')
        for block in self.blocks:
            try:
                block.click(event)
            except BlockError as e:
                logger.warning(str(e))
            except Exception:
                logger.error(f'Click handling in block {block.id} failed', exc_info=True)
        self._emit()

    def _emit(self):
        widgets = [w for block in self.blocks for w in block.view()]
        self.writer.write(widgets)
