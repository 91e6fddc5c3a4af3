"""
mpdbar Handlers - Input and event handling.
"""
from .clicks import dispatch_click
from .events import EventListener

__all__ = ['dispatch_click', 'EventListener']
