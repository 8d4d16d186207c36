"""Domain events package.

Usage:
    from src.domain.events import BroadcastKind, BroadcastMessage
"""

from src.domain.events.broadcast_message import BroadcastKind, BroadcastMessage

__all__ = ["BroadcastKind", "BroadcastMessage"]
