"""Cargo routing — assigning an itinerary and asking for candidate routes."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.itinerary import Itinerary, itinerary_from_dicts
from shipping.domain import shipping
from shipping.handling.handling_event import HandlingEvent
from shipping.routing import get_routing
from shipping.utils.logging import log_call


@shipping.command(part_of="Cargo")
class AssignCargoToRoute:
    """Assign a cargo to an itinerary, typically one picked from the routing candidates."""

    tracking_id = Identifier(required=True)
    legs = Text(required=True)  # JSON list of leg dicts


@shipping.command_handler(part_of=Cargo)
class RouteAssignmentHandler:
    @handle(AssignCargoToRoute)
    @log_call("assign_to_route", "tracking_id")
    def assign_cargo_to_route(self, command):
        try:
            legs_data = json.loads(command.legs)
        except json.JSONDecodeError as exc:
            raise ValidationError({"legs": ["Legs must be a JSON list"]}) from exc
        if not isinstance(legs_data, list):
            raise ValidationError({"legs": ["Legs must be a JSON list"]})

        repo = current_domain.repository_for(Cargo)
        cargo = repo.lookup(command.tracking_id)
        history = current_domain.repository_for(HandlingEvent).history_of(command.tracking_id)

        cargo.assign_to_route(itinerary_from_dicts(legs_data), history)
        repo.add(cargo)


@log_call("request_routes", "tracking_id")
def request_possible_routes_for_cargo(tracking_id: str) -> list[Itinerary]:
    """Candidate itineraries for the cargo's current route specification.

    An unknown tracking id raises ``UnknownCargoError``.
    """
    cargo = current_domain.repository_for(Cargo).lookup(tracking_id)
    return get_routing().fetch_routes_for_specification(cargo.route_specification)
