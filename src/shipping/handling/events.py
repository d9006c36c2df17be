"""Handling domain events."""

from protean.fields import DateTime, Identifier, Integer, String

from shipping.domain import shipping


@shipping.event(part_of="HandlingEvent")
class HandlingEventRegistered:
    """A handling event was stored. Consumers treat it as "cargo was handled"."""

    __version__ = 1

    handling_event_id = Identifier(required=True)
    tracking_id = Identifier(required=True)
    event_type = String(required=True)
    location = String(required=True)
    voyage_number = String()
    completion_time = DateTime(required=True)
    registration_time = DateTime(required=True)
    sequence = Integer(required=True)
