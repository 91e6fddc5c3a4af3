"""
mpdbar Errors - Exception hierarchy shared by all modules.
"""


class MpdBarError(Exception):
    """Base class for all mpdbar errors."""


class ConfigError(MpdBarError):
    """Invalid or unreadable configuration."""


class PlayerConnectionError(MpdBarError):
    """The MPD server could not be reached or dropped the connection."""


class BlockError(MpdBarError):
    """Error raised by a block, tagged with the block's name."""

    def __init__(self, block: str, message: str):
        super().__init__(f'[{block}] {message}')
        self.block = block
        self.message = message
