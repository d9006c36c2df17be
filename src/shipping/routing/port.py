"""Routing port — abstract interface for route-finding services.

Computing itineraries is outside the domain. Booking asks the port for
candidates and lets the operator assign one of them.
"""

from abc import ABC, abstractmethod

from shipping.cargo.itinerary import Itinerary
from shipping.cargo.route_specification import RouteSpecification


class RoutingPort(ABC):
    """Abstract interface for routing adapters."""

    @abstractmethod
    def fetch_routes_for_specification(self, route_specification: RouteSpecification) -> list[Itinerary]:
        """Return candidate itineraries from origin to destination.

        Candidates are not required to meet the arrival deadline; callers
        compare ``final_arrival_time()`` against it if they care.
        """
        ...
