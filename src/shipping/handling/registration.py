"""Handling event registration — command and handler.

Receives handling reports from ports and terminals, validates them through
the HandlingEventFactory and appends them to the cargo's history. The
stored event is announced as ``HandlingEventRegistered``, which the cargo
side consumes to re-derive delivery progress.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.handling import HandlingEventType
from shipping.domain import shipping
from shipping.handling.factory import HandlingEventFactory
from shipping.handling.handling_event import HandlingEvent
from shipping.location.location import Location
from shipping.utils.logging import log_call
from shipping.voyage.voyage import Voyage


@shipping.command(part_of="HandlingEvent")
class RegisterHandlingEvent:
    """Report that a cargo was received, loaded, unloaded, cleared or claimed."""

    completion_time = DateTime(required=True)
    tracking_id = Identifier(required=True)
    voyage_number = String(max_length=20)
    location = String(required=True, max_length=5)
    event_type = String(required=True, max_length=20, choices=HandlingEventType)


@shipping.command_handler(part_of=HandlingEvent)
class HandlingEventRegistrationHandler:
    @handle(RegisterHandlingEvent)
    @log_call("register_incident", "tracking_id", "event_type", "location", "voyage_number")
    def register_handling_event(self, command):
        if command.event_type == HandlingEventType.NOT_HANDLED.value:
            raise ValidationError({"event_type": ["A handling event must have a handled type"]})

        factory = HandlingEventFactory(
            cargo_lookup=current_domain.repository_for(Cargo),
            voyage_lookup=current_domain.repository_for(Voyage),
            location_lookup=current_domain.repository_for(Location),
        )
        event = factory.create_handling_event(
            registration_time=datetime.now(UTC),
            completion_time=command.completion_time,
            tracking_id=command.tracking_id,
            voyage_number=command.voyage_number or "",
            unlocode=command.location,
            event_type=command.event_type,
        )

        repo = current_domain.repository_for(HandlingEvent)
        event.record(repo.next_sequence_for(command.tracking_id))
        repo.add(event)
        return str(event.id)
