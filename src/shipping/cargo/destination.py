"""Destination change — command and handler.

Keeps origin and deadline, swaps the destination, and re-derives delivery
against the stored handling history so transport progress is preserved.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.route_specification import RouteSpecification
from shipping.domain import shipping
from shipping.handling.handling_event import HandlingEvent
from shipping.location.location import Location
from shipping.utils.logging import log_call


@shipping.command(part_of="Cargo")
class ChangeDestination:
    tracking_id = Identifier(required=True)
    destination = String(required=True, max_length=5)


@shipping.command_handler(part_of=Cargo)
class DestinationChangeHandler:
    @handle(ChangeDestination)
    @log_call("change_destination", "tracking_id", "destination")
    def change_destination(self, command):
        repo = current_domain.repository_for(Cargo)
        cargo = repo.lookup(command.tracking_id)
        current_domain.repository_for(Location).lookup(command.destination)

        route_specification = RouteSpecification(
            origin=cargo.origin,
            destination=command.destination,
            arrival_deadline=cargo.route_specification.arrival_deadline,
        )
        history = current_domain.repository_for(HandlingEvent).history_of(command.tracking_id)
        cargo.specify_new_route(route_specification, history)
        repo.add(cargo)
