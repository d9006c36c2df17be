"""Shared BDD fixtures and step definitions for the Shipping domain."""

from datetime import UTC, datetime

import pytest
from pytest_bdd import given, parsers, then
from shipping.cargo.cargo import Cargo
from shipping.cargo.events import (
    CargoArrivedAtDestination,
    CargoBooked,
    CargoMisdirected,
    CargoRouted,
    DeliveryStatusUpdated,
    RouteSpecified,
)
from shipping.cargo.itinerary import Itinerary, Leg
from shipping.cargo.route_specification import RouteSpecification

_CARGO_EVENT_CLASSES = {
    "CargoBooked": CargoBooked,
    "RouteSpecified": RouteSpecified,
    "CargoRouted": CargoRouted,
    "DeliveryStatusUpdated": DeliveryStatusUpdated,
    "CargoMisdirected": CargoMisdirected,
    "CargoArrivedAtDestination": CargoArrivedAtDestination,
}

DEADLINE = datetime(2026, 5, 1, tzinfo=UTC)


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def handled():
    """Handling events recorded for the cargo under test, oldest first."""
    return []


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cargo booked from "{origin}" to "{destination}"'), target_fixture="cargo")
def booked_cargo(origin, destination):
    cargo = Cargo.new(
        "BDD00001",
        RouteSpecification(origin=origin, destination=destination, arrival_deadline=DEADLINE),
    )
    cargo._events.clear()
    return cargo


@given(parsers.cfparse('the cargo is routed on voyage "{voyage}" from "{load}" to "{unload}"'))
def routed_cargo(cargo, voyage, load, unload):
    cargo.assign_to_route(
        Itinerary(
            legs=[
                Leg(
                    voyage_number=voyage,
                    load_location=load,
                    unload_location=unload,
                    load_time=datetime(2026, 4, 1, 8, tzinfo=UTC),
                    unload_time=datetime(2026, 4, 10, 17, tzinfo=UTC),
                )
            ]
        )
    )
    cargo._events.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the routing status is "{status}"'))
def routing_status_is(cargo, status):
    assert cargo.delivery.routing_status == status


@then(parsers.cfparse('the transport status is "{status}"'))
def transport_status_is(cargo, status):
    assert cargo.delivery.transport_status == status


@then(parsers.cfparse('the current location is "{location}"'))
def current_location_is(cargo, location):
    assert cargo.delivery.current_location == location


@then("the cargo is misdirected")
def cargo_is_misdirected(cargo):
    assert cargo.delivery.is_misdirected is True


@then("the cargo is not misdirected")
def cargo_is_not_misdirected(cargo):
    assert cargo.delivery.is_misdirected is False


@then(parsers.cfparse('the next expected activity is "{event_type}" at "{location}"'))
def next_expected_is(cargo, event_type, location):
    expected = cargo.delivery.next_expected_activity
    assert expected is not None
    assert expected.event_type == event_type
    assert expected.location == location


@then("no next activity is expected")
def no_next_expected(cargo):
    assert cargo.delivery.next_expected_activity is None


@then(parsers.cfparse("a {event_type} event is raised"))
def cargo_event_raised(cargo, event_type):
    event_cls = _CARGO_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in cargo._events), (
        f"Expected {event_type} event but found {[type(e).__name__ for e in cargo._events]}"
    )
