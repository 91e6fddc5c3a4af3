"""
mpdbar Utilities - Shared helper functions.
"""
import uuid


def pseudo_uuid() -> str:
    """Return an opaque token unique within this process."""
    return uuid.uuid4().hex


def clamp_volume(level: int) -> int:
    """Clamp a volume level to the 0-100 range MPD accepts."""
    return max(0, min(100, level))
