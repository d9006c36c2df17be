"""Delivery — the derived progress of a cargo.

A Delivery is never patched. It is recomputed wholesale from the route
specification, the itinerary and the handling history every time one of
them changes, so it cannot drift from its inputs:

    routing status      Not routed / Misrouted / Routed
    transport status    from the type of the most recent handling event
    misdirected         some recorded event was not expected by the itinerary
    next expected       the activity that follows along the itinerary
    ETA                 final arrival time of a routed itinerary
"""

from enum import Enum

from protean.fields import Boolean, DateTime, String

from shipping.cargo.handling import HandlingActivity, HandlingEventType
from shipping.domain import shipping


class RoutingStatus(Enum):
    NOT_ROUTED = "Not routed"
    MISROUTED = "Misrouted"
    ROUTED = "Routed"


class TransportStatus(Enum):
    NOT_RECEIVED = "Not Received"
    IN_PORT = "In Port"
    ONBOARD_CARRIER = "Onboard Carrier"
    CLAIMED = "Claimed"
    UNKNOWN = "Unknown"


_IN_PORT_EVENTS = {HandlingEventType.RECEIVE, HandlingEventType.UNLOAD, HandlingEventType.CUSTOMS}


@shipping.value_object(part_of="Cargo")
class Delivery:
    routing_status = String(
        required=True,
        max_length=20,
        choices=RoutingStatus,
        default=RoutingStatus.NOT_ROUTED.value,
    )
    transport_status = String(
        required=True,
        max_length=20,
        choices=TransportStatus,
        default=TransportStatus.NOT_RECEIVED.value,
    )
    current_location = String(max_length=5)  # only while In Port
    current_voyage = String(max_length=20)  # only while Onboard Carrier
    last_known_location = String(max_length=5)
    eta = DateTime()
    is_misdirected = Boolean(default=False)
    is_unloaded_at_destination = Boolean(default=False)
    next_expected_type = String(max_length=20, choices=HandlingEventType)
    next_expected_location = String(max_length=5)
    next_expected_voyage = String(max_length=20)

    @property
    def next_expected_activity(self) -> HandlingActivity | None:
        if not self.next_expected_type:
            return None
        return HandlingActivity(
            event_type=self.next_expected_type,
            location=self.next_expected_location,
            voyage_number=self.next_expected_voyage or "",
        )

    @classmethod
    def derive_from(cls, route_specification, itinerary, history) -> "Delivery":
        """Compute the delivery of a cargo from its three inputs.

        Pure and deterministic: the same inputs always yield an equal
        Delivery, and nothing outside the arguments is read.
        """
        routing_status = _routing_status(route_specification, itinerary)
        eta = itinerary.final_arrival_time() if routing_status == RoutingStatus.ROUTED else None

        if history.is_empty():
            receive_at = route_specification.origin if itinerary.is_empty() else itinerary.initial_departure_location()
            return cls(
                routing_status=routing_status.value,
                transport_status=TransportStatus.NOT_RECEIVED.value,
                eta=eta,
                is_misdirected=False,
                is_unloaded_at_destination=False,
                **_expected(HandlingEventType.RECEIVE, receive_at),
            )

        last_event = history.most_recently_completed_event()
        last_activity = last_event.activity
        last_type = HandlingEventType(last_activity.event_type)

        # Once an event is off-plan the cargo stays misdirected until re-routed.
        is_misdirected = any(not itinerary.is_expected(event) for event in history)

        transport_status = _transport_status(last_type)
        in_port = transport_status == TransportStatus.IN_PORT
        onboard = transport_status == TransportStatus.ONBOARD_CARRIER
        next_expected = {} if is_misdirected else _next_expected(itinerary, last_activity)

        return cls(
            routing_status=routing_status.value,
            transport_status=transport_status.value,
            current_location=last_activity.location if in_port else None,
            current_voyage=(last_activity.voyage_number or None) if onboard else None,
            last_known_location=last_activity.location,
            eta=eta,
            is_misdirected=is_misdirected,
            is_unloaded_at_destination=(
                last_type == HandlingEventType.UNLOAD and last_activity.location == route_specification.destination
            ),
            **next_expected,
        )


def _routing_status(route_specification, itinerary) -> RoutingStatus:
    if itinerary.is_empty():
        return RoutingStatus.NOT_ROUTED
    if route_specification.is_satisfied_by(itinerary):
        return RoutingStatus.ROUTED
    return RoutingStatus.MISROUTED


def _transport_status(event_type: HandlingEventType) -> TransportStatus:
    if event_type == HandlingEventType.LOAD:
        return TransportStatus.ONBOARD_CARRIER
    if event_type in _IN_PORT_EVENTS:
        return TransportStatus.IN_PORT
    if event_type == HandlingEventType.CLAIM:
        return TransportStatus.CLAIMED
    return TransportStatus.UNKNOWN


def _expected(event_type: HandlingEventType, location: str, voyage_number: str = "") -> dict:
    return {
        "next_expected_type": event_type.value,
        "next_expected_location": location,
        "next_expected_voyage": voyage_number,
    }


def _next_expected(itinerary, last_activity) -> dict:
    """The activity that logically follows ``last_activity`` along ``itinerary``."""
    if itinerary.is_empty():
        return {}

    legs = itinerary.legs
    last_type = HandlingEventType(last_activity.event_type)

    if last_type == HandlingEventType.RECEIVE:
        first = legs[0]
        return _expected(HandlingEventType.LOAD, first.load_location, first.voyage_number)

    if last_type == HandlingEventType.LOAD:
        for leg in legs:
            if leg.load_location == last_activity.location and leg.voyage_number == last_activity.voyage_number:
                return _expected(HandlingEventType.UNLOAD, leg.unload_location, leg.voyage_number)
        return {}

    if last_type == HandlingEventType.UNLOAD:
        for index, leg in enumerate(legs):
            if leg.unload_location == last_activity.location and leg.voyage_number == last_activity.voyage_number:
                if index + 1 < len(legs):
                    following = legs[index + 1]
                    return _expected(HandlingEventType.LOAD, following.load_location, following.voyage_number)
                return _expected(HandlingEventType.CLAIM, leg.unload_location)
        return {}

    return {}
