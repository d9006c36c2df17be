"""Cargo domain events — immutable facts about booking, routing and delivery progress.

All events are past tense, versioned, and carry enough data for the
tracking projection and the inspection handler.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from shipping.domain import shipping


@shipping.event(part_of="Cargo")
class CargoBooked:
    """A new cargo was booked."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime(required=True)
    booked_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class RouteSpecified:
    """The route specification of a cargo was replaced (e.g. a destination change)."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime(required=True)


@shipping.event(part_of="Cargo")
class CargoRouted:
    """A cargo was assigned to an itinerary."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    legs = Text(required=True)  # JSON list of leg dicts
    leg_count = Integer(required=True)
    final_arrival_location = String()  # empty when the cargo was un-routed
    final_arrival_time = DateTime()


@shipping.event(part_of="Cargo")
class DeliveryStatusUpdated:
    """The delivery of a cargo was re-derived."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    routing_status = String(required=True)
    transport_status = String(required=True)
    current_location = String()
    current_voyage = String()
    last_known_location = String()
    eta = DateTime()
    is_misdirected = Boolean(default=False)
    is_unloaded_at_destination = Boolean(default=False)
    next_expected_type = String()
    next_expected_location = String()
    next_expected_voyage = String()


@shipping.event(part_of="Cargo")
class CargoMisdirected:
    """A handling event put the cargo off its itinerary."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    last_known_location = String()
    destination = String(required=True)


@shipping.event(part_of="Cargo")
class CargoArrivedAtDestination:
    """The cargo was unloaded at the destination of its route specification."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    destination = String(required=True)
