"""Fake routing adapter — deterministic routes over the known voyage schedules.

Finds direct movements from origin to destination and routes with one
transshipment, where the second movement departs after the first arrives.
Good enough for development and tests; not an optimizer.
"""

from collections.abc import Callable

from protean.utils.globals import current_domain

from shipping.cargo.itinerary import Itinerary, Leg
from shipping.cargo.route_specification import RouteSpecification
from shipping.routing.port import RoutingPort
from shipping.voyage.voyage import Voyage


class FakeRoutingService(RoutingPort):
    def __init__(self, voyages: Callable[[], list] | None = None):
        """``voyages`` replaces the stored schedules as the source of movements."""
        self._voyages = voyages

    def _known_voyages(self) -> list:
        if self._voyages is not None:
            return self._voyages()
        return current_domain.repository_for(Voyage).list_all()

    def fetch_routes_for_specification(self, route_specification: RouteSpecification) -> list[Itinerary]:
        movements = [(voyage.voyage_number, movement) for voyage in self._known_voyages() for movement in voyage.schedule]

        candidates = []
        for number, first in movements:
            if first.departure_location != route_specification.origin:
                continue
            if first.arrival_location == route_specification.destination:
                candidates.append(Itinerary(legs=[_leg(number, first)]))
                continue
            for next_number, second in movements:
                if (
                    second.departure_location == first.arrival_location
                    and second.arrival_location == route_specification.destination
                    and second.departure_time >= first.arrival_time
                ):
                    candidates.append(Itinerary(legs=[_leg(number, first), _leg(next_number, second)]))
        return candidates


def _leg(voyage_number: str, movement) -> Leg:
    return Leg(
        voyage_number=voyage_number,
        load_location=movement.departure_location,
        unload_location=movement.arrival_location,
        load_time=movement.departure_time,
        unload_time=movement.arrival_time,
    )
