"""Route finding behind a port.

``get_routing()`` returns the active routing service. The implementation
is picked by the ``ROUTING_ADAPTER`` environment variable on first use
(only ``fake`` ships today). Tests swap it with ``set_routing()`` and put
the default back with ``reset_routing()``.
"""

import os

from shipping.routing.port import RoutingPort

_routing_instance: RoutingPort | None = None


def get_routing() -> RoutingPort:
    global _routing_instance
    if _routing_instance is None:
        adapter = os.environ.get("ROUTING_ADAPTER", "fake")
        if adapter != "fake":
            raise ValueError(f"Unknown routing adapter: {adapter}")

        from shipping.routing.fake_adapter import FakeRoutingService

        _routing_instance = FakeRoutingService()
    return _routing_instance


def set_routing(routing: RoutingPort) -> None:
    """Use ``routing`` for every route request until reset."""
    global _routing_instance
    _routing_instance = routing


def reset_routing() -> None:
    global _routing_instance
    _routing_instance = None
