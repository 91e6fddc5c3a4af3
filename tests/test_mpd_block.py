"""
Tests for MpdBlock - rendering, reconnect display, click commands.
"""
import dataclasses
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from mpdbar.blocks import MpdBlock
from mpdbar.config import RECONNECTING_TEXT
from mpdbar.errors import BlockError
from mpdbar.models import ClickEvent, RemoteStatus, RemoteTrack

from conftest import FakeConnection, FakeConnector


class TestConstruction:
    """Tests for block creation."""

    def test_initial_text(self, make_block):
        block = make_block()
        assert block.text == 'Mpd'
        assert block.widget.icon == 'music'

    def test_ids_are_unique(self, playing_status):
        connector = FakeConnector(FakeConnection(playing_status), FakeConnection(playing_status))
        a = MpdBlock(connect=connector)
        b = MpdBlock(connect=connector)
        assert a.id != b.id

    def test_connect_failure_is_fatal(self):
        """No block without an initial connection."""
        with pytest.raises(BlockError, match='Could not connect'):
            MpdBlock(connect=FakeConnector())

    def test_invalid_format_is_fatal(self, make_block):
        with pytest.raises(BlockError, match='Invalid format'):
            make_block(format='{artist')

    def test_uses_configured_address(self, make_block, connector):
        make_block(ip='music.local:6601', timeout=5.0)
        assert connector.calls == [('music.local:6601', 5.0)]


class TestRender:
    """Tests for update() output."""

    def test_default_format_end_to_end(self, make_block):
        block = make_block()
        block.update()
        assert block.text == 'X - Y [1:05/3:05]'

    def test_returns_update_interval(self, make_block):
        block = make_block(interval=5)
        assert block.update() == 5.0

    def test_flags(self, make_block, connection):
        connection.status_value = RemoteStatus(repeat=True, single=True)
        block = make_block(format='{repeat}{random}{single}{consume}')
        block.update()
        assert block.text == 'RS'

    def test_paused_and_stopped(self, make_block, connection, playing_status):
        block = make_block(format='{playback_info}')

        connection.status_value = dataclasses.replace(playing_status, state='pause')
        block.update()
        assert block.text == 'paused'

        connection.status_value = dataclasses.replace(playing_status, state='stop')
        block.update()
        assert block.text == 'stopped'

    def test_nothing_queued(self, make_block, connection):
        connection.track = None
        block = make_block(format='{artist}|{title}|{length}')
        block.update()
        assert block.text == '||'

    def test_missing_tags_fall_back(self, make_block, connection):
        connection.track = RemoteTrack(file='incoming/song.mp3')
        block = make_block(format='{artist} - {title} ({length})')
        block.update()
        assert block.text == 'unknown artist - incoming/song.mp3 ()'

    def test_volume(self, make_block):
        block = make_block(format='vol {volume}%')
        block.update()
        assert block.text == 'vol 50%'

    def test_unknown_placeholder_passes_through(self, make_block, connection):
        connection.track = RemoteTrack(file='foo.ogg', title='Foo')
        block = make_block(format='{title} #{nonexistent}')
        block.update()
        assert block.text == 'Foo #{nonexistent}'

    def test_render_is_idempotent(self, make_block):
        block = make_block()
        block.update()
        first = block.text
        block.update()
        assert block.text == first

    def test_widget_output(self, make_block):
        block = make_block(color_overrides={'color': '#ff0000'})
        block.update()
        [widget] = block.view()
        data = widget.to_i3bar()
        assert data['name'] == block.id
        assert data['color'] == '#ff0000'
        assert data['full_text'].endswith('X - Y [1:05/3:05]')


class TestReconnectDisplay:
    """Tests for rendering while the connection is broken."""

    def test_failed_probe_shows_placeholder(self, make_block, connection):
        block = make_block()
        block.update()
        connection.broken = True
        songs_read = connection.song_calls

        assert block.update() == 1.0
        assert block.text == RECONNECTING_TEXT
        assert connection.song_calls == songs_read

    def test_full_render_after_reconnect(self, make_block, connection, connector, track):
        block = make_block()
        block.update()
        connection.broken = True
        fresh = FakeConnection(RemoteStatus(state='pause'), track)
        connector.connections.append(fresh)

        block.update()
        assert block.text == RECONNECTING_TEXT

        block.update()
        assert block.text == 'X - Y [paused]'
        assert fresh.song_calls == 1

    def test_server_down_keeps_placeholder(self, make_block, connection):
        block = make_block()
        connection.broken = True

        for _ in range(3):
            assert block.update() == 1.0
            assert block.text == RECONNECTING_TEXT

    def test_song_query_failure_shows_placeholder(self, make_block, connection):
        block = make_block()
        connection.song_broken = True

        block.update()

        assert block.text == RECONNECTING_TEXT
        assert connection.closed
        assert block.connection.state == 'reconnecting'

    def test_full_render_after_song_query_failure(self, make_block, connection, connector, track):
        """A failed song query reconnects in the same cycle, like a failed probe."""
        block = make_block()
        connection.song_broken = True
        fresh = FakeConnection(RemoteStatus(state='pause'), track)
        connector.connections.append(fresh)

        block.update()
        assert block.text == RECONNECTING_TEXT
        assert block.connection.connection is fresh

        block.update()
        assert block.text == 'X - Y [paused]'


class TestClick:
    """Tests for click() command dispatch."""

    @pytest.mark.parametrize('button, command', [
        ('left', 'previous'),
        ('middle', 'toggle_pause'),
        ('right', 'next'),
    ])
    def test_buttons(self, make_block, connection, button, command):
        block = make_block()
        block.click(ClickEvent(name=block.id, button=button))
        assert connection.commands == [command]

    def test_click_re_renders(self, make_block):
        block = make_block()
        block.click(ClickEvent(name=block.id, button='right'))
        assert block.text == 'X - Y [1:05/3:05]'

    def test_other_button_only_renders(self, make_block, connection):
        block = make_block()
        block.click(ClickEvent(name=block.id, button='other'))
        assert connection.commands == []
        assert block.text == 'X - Y [1:05/3:05]'

    def test_other_block_ignored(self, make_block, connection):
        """Events for another id cause no command and no render."""
        block = make_block()
        status_calls = connection.status_calls

        block.click(ClickEvent(name='someone-else', button='left'))

        assert connection.commands == []
        assert connection.status_calls == status_calls
        assert block.text == 'Mpd'

    def test_volume_up_clamped(self, make_block, connection, playing_status):
        connection.status_value = dataclasses.replace(playing_status, volume=98)
        block = make_block()

        for _ in range(5):
            block.click(ClickEvent(name=block.id, button='wheel_up'))

        assert connection.status_value.volume == 100
        assert all(level <= 100 for _, level in connection.commands)
        assert connection.commands[0] == ('set_volume', 100)

    def test_volume_down_clamped(self, make_block, connection, playing_status):
        connection.status_value = dataclasses.replace(playing_status, volume=3)
        block = make_block()

        block.click(ClickEvent(name=block.id, button='wheel_down'))
        block.click(ClickEvent(name=block.id, button='wheel_down'))

        assert connection.commands == [('set_volume', 0), ('set_volume', 0)]

    def test_command_failure_raises_after_render(self, make_block, connection):
        connection.fail_commands = True
        block = make_block()

        with pytest.raises(BlockError, match='next track'):
            block.click(ClickEvent(name=block.id, button='right'))

        assert block.text == 'X - Y [1:05/3:05]'
        assert block.connection.state == 'connected'

    def test_click_while_disconnected(self, make_block, connection):
        block = make_block()
        connection.broken = True
        block.update()  # probe fails, reconnect fails

        with pytest.raises(BlockError, match='Not connected'):
            block.click(ClickEvent(name=block.id, button='left'))

        assert block.text == RECONNECTING_TEXT

    def test_close(self, make_block, connection):
        block = make_block()
        block.close()
        assert connection.closed
