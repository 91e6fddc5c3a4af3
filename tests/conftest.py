"""
Pytest configuration and shared fixtures for mpdbar tests.
"""
import sys
import dataclasses
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mpdbar.config import BlockConfig
from mpdbar.errors import PlayerConnectionError
from mpdbar.models import RemoteStatus, RemoteTrack


class FakeConnection:
    """In-memory stand-in for MpdConnection."""

    def __init__(self, status: RemoteStatus = None, track: RemoteTrack = None):
        self.status_value = status or RemoteStatus()
        self.track = track
        self.broken = False
        self.song_broken = False
        self.fail_commands = False
        self.closed = False
        self.commands = []
        self.status_calls = 0
        self.song_calls = 0

    def status(self) -> RemoteStatus:
        self.status_calls += 1
        if self.broken:
            raise PlayerConnectionError('Connection lost while reading line')
        return self.status_value

    def current_song(self):
        self.song_calls += 1
        if self.broken or self.song_broken:
            raise PlayerConnectionError('Connection lost while reading line')
        return self.track

    def previous(self) -> bool:
        return self._command('previous')

    def next(self) -> bool:
        return self._command('next')

    def toggle_pause(self) -> bool:
        return self._command('toggle_pause')

    def set_volume(self, level: int) -> bool:
        ok = self._command('set_volume', level)
        if ok:
            self.status_value = dataclasses.replace(self.status_value, volume=level)
        return ok

    def _command(self, *command) -> bool:
        if self.fail_commands:
            return False
        self.commands.append(command if len(command) > 1 else command[0])
        return True

    def close(self):
        self.closed = True


class FakeConnector:
    """Connection factory handing out prepared connections in order."""

    def __init__(self, *connections):
        self.connections = list(connections)
        self.calls = []
        self.fail = False

    def __call__(self, address, timeout=None):
        self.calls.append((address, timeout))
        if self.fail or not self.connections:
            raise PlayerConnectionError(f'Could not connect to {address}: Connection refused')
        return self.connections.pop(0)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after each test."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def playing_status():
    """Playing, 1:05 into the song, no flags set."""
    return RemoteStatus(state='play', elapsed=65.4, volume=50)


@pytest.fixture
def track():
    return RemoteTrack(file='music/x/y.flac', title='Y', artist='X', duration=185.0)


@pytest.fixture
def connection(playing_status, track):
    return FakeConnection(playing_status, track)


@pytest.fixture
def connector(connection):
    return FakeConnector(connection)


@pytest.fixture
def make_block(connector):
    """Build an MpdBlock on the fake connector with optional config overrides."""
    from mpdbar.blocks import MpdBlock

    def factory(**options):
        return MpdBlock(BlockConfig(**options), connect=connector)

    return factory
