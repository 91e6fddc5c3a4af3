"""
Button Widget - The visible part of a block as sent to the bar.
"""
from typing import Dict, Optional

from ..config import ICONS


class ButtonWidget:
    """Text plus a fixed icon, identified by the owning block's id."""

    def __init__(self, id: str, text: str = '', icon: Optional[str] = None,
                 color_overrides: Optional[Dict[str, str]] = None):
        self.id = id
        self.text = text
        self.icon = icon
        self.color_overrides = dict(color_overrides or {})

    def set_text(self, text: str):
        self.text = text

    @property
    def full_text(self) -> str:
        icon = ICONS.get(self.icon, '') if self.icon else ''
        return f'{icon} {self.text}' if icon else self.text

    def to_i3bar(self) -> dict:
        """Block dict for the i3bar protocol. Overrides are passed through as-is."""
        block = {
            'full_text': self.full_text,
            'name': self.id,
        }
        block.update(self.color_overrides)
        return block
