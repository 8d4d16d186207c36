"""Domain enums package.

Usage:
    from src.domain.enums import SubscriberState
"""

from src.domain.enums.subscriber_state import SubscriberState

__all__ = ["SubscriberState"]
