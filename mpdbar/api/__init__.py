"""
mpdbar API modules - Remote player integration.
"""
from .mpd_client import MpdConnection, parse_address

__all__ = ['MpdConnection', 'parse_address']
