"""Cargo tracking — customer-facing view of where a cargo is and what comes next."""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.delivery import TransportStatus
from shipping.cargo.events import CargoBooked, CargoRouted, DeliveryStatusUpdated, RouteSpecified
from shipping.cargo.handling import HandlingEventType
from shipping.domain import shipping
from shipping.errors import UnknownCargoError
from shipping.handling.events import HandlingEventRegistered
from shipping.handling.handling_event import HandlingEvent
from shipping.utils.logging import log_call


@shipping.projection
class CargoTrackingView:
    tracking_id = Identifier(identifier=True, required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime()
    routing_status = String()
    transport_status = String()
    status_text = String(max_length=200)
    last_known_location = String()
    current_voyage = String()
    eta = DateTime()
    next_expected_activity = String(max_length=200)
    is_misdirected = Boolean(default=False)
    leg_count = Integer(default=0)
    events_json = Text()  # JSON list of handling events, oldest first
    booked_at = DateTime()


_DESCRIPTIONS = {
    HandlingEventType.RECEIVE.value: ("Received in {location}", "Receive in {location}"),
    HandlingEventType.LOAD.value: (
        "Loaded onto voyage {voyage} in {location}",
        "Load onto voyage {voyage} in {location}",
    ),
    HandlingEventType.UNLOAD.value: (
        "Unloaded off voyage {voyage} in {location}",
        "Unload off voyage {voyage} in {location}",
    ),
    HandlingEventType.CLAIM.value: ("Claimed in {location}", "Claim in {location}"),
    HandlingEventType.CUSTOMS.value: ("Cleared customs in {location}", "Clear customs in {location}"),
}


def describe_activity(event_type: str | None, location: str | None, voyage_number: str | None, expected=False) -> str:
    """Human-readable sentence for a completed (or, with ``expected``, an upcoming) handling activity."""
    if not event_type:
        return ""
    if event_type not in _DESCRIPTIONS:
        return "Unknown status"
    completed, upcoming = _DESCRIPTIONS[event_type]
    return (upcoming if expected else completed).format(location=location, voyage=voyage_number)


def describe_status(transport_status: str, location: str | None, voyage_number: str | None) -> str:
    if transport_status == TransportStatus.IN_PORT.value:
        return f"In port {location}"
    if transport_status == TransportStatus.ONBOARD_CARRIER.value:
        return f"Onboard voyage {voyage_number}"
    return transport_status


@log_call("track", "tracking_id")
def track(tracking_id: str) -> CargoTrackingView:
    """The tracking view of a cargo, or ``UnknownCargoError``."""
    try:
        return current_domain.repository_for(CargoTrackingView).get(tracking_id)
    except ObjectNotFoundError as exc:
        raise UnknownCargoError(tracking_id) from exc


@shipping.projector(projector_for=CargoTrackingView, aggregates=[Cargo, HandlingEvent])
class CargoTrackingProjector:
    @on(CargoBooked)
    def on_cargo_booked(self, event):
        current_domain.repository_for(CargoTrackingView).add(
            CargoTrackingView(
                tracking_id=event.tracking_id,
                origin=event.origin,
                destination=event.destination,
                arrival_deadline=event.arrival_deadline,
                events_json=json.dumps([]),
                booked_at=event.booked_at,
            )
        )

    @on(RouteSpecified)
    def on_route_specified(self, event):
        repo = current_domain.repository_for(CargoTrackingView)
        view = repo.get(event.tracking_id)
        view.destination = event.destination
        view.arrival_deadline = event.arrival_deadline
        repo.add(view)

    @on(CargoRouted)
    def on_cargo_routed(self, event):
        repo = current_domain.repository_for(CargoTrackingView)
        view = repo.get(event.tracking_id)
        view.leg_count = event.leg_count
        repo.add(view)

    @on(DeliveryStatusUpdated)
    def on_delivery_status_updated(self, event):
        repo = current_domain.repository_for(CargoTrackingView)
        view = repo.get(event.tracking_id)
        view.routing_status = event.routing_status
        view.transport_status = event.transport_status
        view.status_text = describe_status(event.transport_status, event.current_location, event.current_voyage)
        view.last_known_location = event.last_known_location
        view.current_voyage = event.current_voyage
        view.eta = event.eta
        view.is_misdirected = event.is_misdirected
        view.next_expected_activity = describe_activity(
            event.next_expected_type,
            event.next_expected_location,
            event.next_expected_voyage,
            expected=True,
        )
        repo.add(view)

    @on(HandlingEventRegistered)
    def on_handling_event_registered(self, event):
        repo = current_domain.repository_for(CargoTrackingView)
        view = repo.get(event.tracking_id)

        existing = json.loads(view.events_json) if view.events_json else []
        existing.append(
            {
                "event_type": event.event_type,
                "location": event.location,
                "voyage_number": event.voyage_number or "",
                "completion_time": event.completion_time.isoformat(),
                "description": describe_activity(event.event_type, event.location, event.voyage_number),
            }
        )
        view.events_json = json.dumps(existing)
        repo.add(view)
