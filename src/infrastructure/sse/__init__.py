"""Real-time distribution adapters.

In-process implementation of per-topic fan-out over Server-Sent Events:
- Subscriber / QueueTransport: One open stream and its bounded write queue
- TopicRegistry: Per-topic subscriber index with per-topic locks
- BroadcastDispatcher: Fan-out with per-subscriber pruning
- HeartbeatScheduler: Per-subscriber liveness pings

Architecture:
    - Single-process registry (no cross-node fan-out)
    - Best-effort, at-most-once delivery; no replay for absent viewers
    - Delivery failures never reach API callers; they only prune subscribers
"""

from src.infrastructure.sse.broadcast_dispatcher import BroadcastDispatcher
from src.infrastructure.sse.heartbeat_scheduler import HeartbeatScheduler
from src.infrastructure.sse.subscriber import QueueTransport, Subscriber
from src.infrastructure.sse.topic_registry import TopicRegistry

__all__ = [
    "BroadcastDispatcher",
    "HeartbeatScheduler",
    "QueueTransport",
    "Subscriber",
    "TopicRegistry",
]
