"""
mpdbar Managers - Connection lifecycle.
"""
from .connection import ConnectionManager, Probe

__all__ = ['ConnectionManager', 'Probe']
