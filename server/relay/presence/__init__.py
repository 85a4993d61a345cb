from relay.presence.handlers import EventRouter
from relay.presence.registry import Registry

__all__ = [
    "EventRouter",
    "Registry",
]
