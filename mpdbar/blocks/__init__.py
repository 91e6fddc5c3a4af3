"""
mpdbar Blocks - Status bar blocks.
"""
from .mpd import MpdBlock

__all__ = ['MpdBlock']
