"""
Bar Output - Writes the i3bar JSON protocol to a stream.
"""
import json
from typing import Iterable, TextIO

from .widget import ButtonWidget

HEADER = {'version': 1, 'click_events': True}


class BarWriter:
    """Streams status lines: header, '[', then one JSON array per line."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._first_line = True

    def start(self):
        self.stream.write(json.dumps(HEADER) + '\n')
        self.stream.write('[\n')
        self.stream.flush()

    def write(self, widgets: Iterable[ButtonWidget]):
        line = json.dumps([w.to_i3bar() for w in widgets], ensure_ascii=False)
        if not self._first_line:
            line = ',' + line
        self._first_line = False
        self.stream.write(line + '\n')
        self.stream.flush()
