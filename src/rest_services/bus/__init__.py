"""In-memory publish/subscribe bus shared by all service clients."""

from rest_services.bus.memory_bus import EventBus, Subscription

__all__ = ["EventBus", "Subscription"]
