"""Cargo booking — command and handler."""

from protean import handle
from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.route_specification import RouteSpecification
from shipping.domain import shipping
from shipping.identifiers import next_tracking_id
from shipping.location.location import Location
from shipping.utils.logging import log_call


@shipping.command(part_of="Cargo")
class BookNewCargo:
    """Book a cargo between two known locations."""

    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)


@shipping.command_handler(part_of=Cargo)
class BookingHandler:
    @handle(BookNewCargo)
    @log_call("book", "origin", "destination", "arrival_deadline")
    def book_new_cargo(self, command):
        locations = current_domain.repository_for(Location)
        locations.lookup(command.origin)
        locations.lookup(command.destination)

        cargo = Cargo.new(
            next_tracking_id(),
            RouteSpecification(
                origin=command.origin,
                destination=command.destination,
                arrival_deadline=command.arrival_deadline,
            ),
        )
        current_domain.repository_for(Cargo).add(cargo)
        return cargo.tracking_id
