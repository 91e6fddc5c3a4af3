"""
mpdbar - MPD status block for i3bar-compatible status bars.
"""
__version__ = '0.1.0'
