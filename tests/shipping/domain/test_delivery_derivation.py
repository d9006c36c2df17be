"""Tests for Delivery.derive_from — routing and transport status, misdirection, ETA and next expected activity."""

from datetime import UTC, datetime

import pytest
from shipping.cargo.delivery import Delivery, RoutingStatus, TransportStatus
from shipping.cargo.handling import EMPTY_HISTORY, HandlingHistory
from shipping.cargo.itinerary import Itinerary, Leg
from shipping.cargo.route_specification import RouteSpecification
from shipping.handling.handling_event import HandlingEvent

EMPTY_ITINERARY_LEGS: list = []


def _leg(voyage, load, unload, load_day, unload_day):
    return Leg(
        voyage_number=voyage,
        load_location=load,
        unload_location=unload,
        load_time=datetime(2026, 4, load_day, tzinfo=UTC),
        unload_time=datetime(2026, 4, unload_day, tzinfo=UTC),
    )


def _event(event_type, location, voyage=""):
    return HandlingEvent(
        tracking_id="ABC123",
        event_type=event_type,
        location=location,
        voyage_number=voyage,
        completion_time=datetime(2026, 4, 1, tzinfo=UTC),
        registration_time=datetime(2026, 4, 1, tzinfo=UTC),
    )


def _history(*events):
    return HandlingHistory.of(events)


@pytest.fixture()
def route_spec():
    return RouteSpecification(
        origin="SESTO",
        destination="USNYC",
        arrival_deadline=datetime(2026, 5, 1, tzinfo=UTC),
    )


@pytest.fixture()
def direct_itinerary():
    return Itinerary(legs=[_leg("0100S", "SESTO", "USNYC", 1, 10)])


@pytest.fixture()
def two_leg_itinerary():
    return Itinerary(
        legs=[
            _leg("V400", "SESTO", "DEHAM", 1, 3),
            _leg("V300", "DEHAM", "USNYC", 5, 12),
        ]
    )


class TestUnhandledCargo:
    def test_empty_itinerary_and_history(self, route_spec):
        delivery = Delivery.derive_from(route_spec, Itinerary(legs=EMPTY_ITINERARY_LEGS), EMPTY_HISTORY)
        assert delivery.routing_status == RoutingStatus.NOT_ROUTED.value
        assert delivery.transport_status == TransportStatus.NOT_RECEIVED.value
        assert delivery.current_location is None
        assert delivery.current_voyage is None
        assert delivery.is_misdirected is False
        assert delivery.eta is None

    def test_not_routed_cargo_is_expected_at_origin(self, route_spec):
        delivery = Delivery.derive_from(route_spec, Itinerary(legs=[]), EMPTY_HISTORY)
        expected = delivery.next_expected_activity
        assert expected.event_type == "Receive"
        assert expected.location == "SESTO"

    def test_misrouted_cargo_is_still_expected_at_initial_departure(self, route_spec):
        itinerary = Itinerary(legs=[_leg("V400", "DEHAM", "USNYC", 1, 3)])
        delivery = Delivery.derive_from(route_spec, itinerary, EMPTY_HISTORY)
        assert delivery.routing_status == RoutingStatus.MISROUTED.value
        assert delivery.next_expected_activity.location == "DEHAM"

    def test_routed_without_history_has_eta(self, route_spec, direct_itinerary):
        delivery = Delivery.derive_from(route_spec, direct_itinerary, EMPTY_HISTORY)
        assert delivery.routing_status == RoutingStatus.ROUTED.value
        assert delivery.eta == datetime(2026, 4, 10, tzinfo=UTC)


class TestRoutingStatus:
    def test_misrouted_when_itinerary_misses_destination(self, route_spec):
        itinerary = Itinerary(legs=[_leg("0100S", "SESTO", "USCHI", 1, 13)])
        delivery = Delivery.derive_from(route_spec, itinerary, EMPTY_HISTORY)
        assert delivery.routing_status == RoutingStatus.MISROUTED.value
        assert delivery.eta is None

    def test_routed_when_chain_satisfies(self, route_spec, two_leg_itinerary):
        delivery = Delivery.derive_from(route_spec, two_leg_itinerary, EMPTY_HISTORY)
        assert delivery.routing_status == RoutingStatus.ROUTED.value


class TestTransportStatus:
    def test_received_cargo_is_in_port(self, route_spec, direct_itinerary):
        delivery = Delivery.derive_from(route_spec, direct_itinerary, _history(_event("Receive", "SESTO")))
        assert delivery.routing_status == RoutingStatus.ROUTED.value
        assert delivery.transport_status == TransportStatus.IN_PORT.value
        assert delivery.current_location == "SESTO"
        assert delivery.current_voyage is None
        assert delivery.is_misdirected is False

    def test_loaded_cargo_is_onboard(self, route_spec, direct_itinerary):
        history = _history(_event("Receive", "SESTO"), _event("Load", "SESTO", "0100S"))
        delivery = Delivery.derive_from(route_spec, direct_itinerary, history)
        assert delivery.transport_status == TransportStatus.ONBOARD_CARRIER.value
        assert delivery.current_voyage == "0100S"
        assert delivery.current_location is None
        assert delivery.last_known_location == "SESTO"

    def test_unloaded_cargo_is_in_port(self, route_spec, direct_itinerary):
        history = _history(
            _event("Receive", "SESTO"),
            _event("Load", "SESTO", "0100S"),
            _event("Unload", "USNYC", "0100S"),
        )
        delivery = Delivery.derive_from(route_spec, direct_itinerary, history)
        assert delivery.transport_status == TransportStatus.IN_PORT.value
        assert delivery.current_location == "USNYC"
        assert delivery.is_unloaded_at_destination is True

    def test_customs_keeps_cargo_in_port(self, route_spec, direct_itinerary):
        history = _history(_event("Receive", "SESTO"), _event("Customs", "SESTO"))
        delivery = Delivery.derive_from(route_spec, direct_itinerary, history)
        assert delivery.transport_status == TransportStatus.IN_PORT.value
        assert delivery.current_location == "SESTO"
        assert delivery.is_misdirected is False

    def test_claimed_cargo(self, route_spec, direct_itinerary):
        history = _history(
            _event("Receive", "SESTO"),
            _event("Load", "SESTO", "0100S"),
            _event("Unload", "USNYC", "0100S"),
            _event("Claim", "USNYC"),
        )
        delivery = Delivery.derive_from(route_spec, direct_itinerary, history)
        assert delivery.transport_status == TransportStatus.CLAIMED.value
        assert delivery.current_location is None
        assert delivery.next_expected_activity is None
        assert delivery.is_unloaded_at_destination is False


class TestMisdirection:
    def test_load_at_unplanned_location_misdirects(self, route_spec, direct_itinerary):
        history = _history(_event("Receive", "SESTO"), _event("Load", "USNYC", "0100S"))
        delivery = Delivery.derive_from(route_spec, direct_itinerary, history)
        assert delivery.is_misdirected is True
        assert delivery.next_expected_activity is None

    def test_misdirection_persists_after_conforming_events(self, route_spec, direct_itinerary):
        history = _history(
            _event("Receive", "DEHAM"),
            _event("Load", "SESTO", "0100S"),
            _event("Unload", "USNYC", "0100S"),
        )
        delivery = Delivery.derive_from(route_spec, direct_itinerary, history)
        assert delivery.is_misdirected is True

    def test_re_routing_around_the_event_clears_misdirection(self, route_spec):
        history = _history(_event("Receive", "SESTO"), _event("Load", "SESTO", "V400"))
        off_plan = Itinerary(legs=[_leg("0100S", "SESTO", "USNYC", 1, 10)])
        re_routed = Itinerary(
            legs=[
                _leg("V400", "SESTO", "DEHAM", 1, 3),
                _leg("V300", "DEHAM", "USNYC", 5, 12),
            ]
        )
        assert Delivery.derive_from(route_spec, off_plan, history).is_misdirected is True
        assert Delivery.derive_from(route_spec, re_routed, history).is_misdirected is False

    def test_empty_itinerary_never_misdirects(self, route_spec):
        history = _history(_event("Receive", "AUMEL"), _event("Load", "AUMEL", "0200T"))
        delivery = Delivery.derive_from(route_spec, Itinerary(legs=[]), history)
        assert delivery.is_misdirected is False
        assert delivery.next_expected_activity is None


class TestNextExpectedActivity:
    def test_after_receive_expect_load_on_first_leg(self, route_spec, two_leg_itinerary):
        delivery = Delivery.derive_from(route_spec, two_leg_itinerary, _history(_event("Receive", "SESTO")))
        expected = delivery.next_expected_activity
        assert (expected.event_type, expected.location, expected.voyage_number) == ("Load", "SESTO", "V400")

    def test_after_load_expect_unload_of_same_leg(self, route_spec, two_leg_itinerary):
        history = _history(_event("Receive", "SESTO"), _event("Load", "SESTO", "V400"))
        expected = Delivery.derive_from(route_spec, two_leg_itinerary, history).next_expected_activity
        assert (expected.event_type, expected.location, expected.voyage_number) == ("Unload", "DEHAM", "V400")

    def test_after_intermediate_unload_expect_load_on_next_leg(self, route_spec, two_leg_itinerary):
        history = _history(
            _event("Receive", "SESTO"),
            _event("Load", "SESTO", "V400"),
            _event("Unload", "DEHAM", "V400"),
        )
        expected = Delivery.derive_from(route_spec, two_leg_itinerary, history).next_expected_activity
        assert (expected.event_type, expected.location, expected.voyage_number) == ("Load", "DEHAM", "V300")

    def test_after_final_unload_expect_claim(self, route_spec, two_leg_itinerary):
        history = _history(
            _event("Receive", "SESTO"),
            _event("Load", "SESTO", "V400"),
            _event("Unload", "DEHAM", "V400"),
            _event("Load", "DEHAM", "V300"),
            _event("Unload", "USNYC", "V300"),
        )
        expected = Delivery.derive_from(route_spec, two_leg_itinerary, history).next_expected_activity
        assert (expected.event_type, expected.location) == ("Claim", "USNYC")
        assert expected.voyage_number == ""

    def test_leg_without_voyage_is_followed_by_empty_voyage(self, route_spec):
        unassigned = Itinerary(legs=[_leg("", "SESTO", "USNYC", 1, 10)])
        history = _history(_event("Receive", "SESTO"))
        delivery = Delivery.derive_from(route_spec, unassigned, history)
        expected = delivery.next_expected_activity
        assert delivery.routing_status == RoutingStatus.ROUTED.value
        assert (expected.event_type, expected.location, expected.voyage_number) == ("Load", "SESTO", "")

        history = _history(_event("Receive", "SESTO"), _event("Load", "SESTO"))
        delivery = Delivery.derive_from(route_spec, unassigned, history)
        assert delivery.is_misdirected is False
        assert delivery.next_expected_activity.location == "USNYC"


class TestDerivationIsPure:
    def test_same_inputs_yield_equal_delivery(self, route_spec, two_leg_itinerary):
        history = _history(_event("Receive", "SESTO"), _event("Load", "SESTO", "V400"))
        first = Delivery.derive_from(route_spec, two_leg_itinerary, history)
        second = Delivery.derive_from(route_spec, two_leg_itinerary, history)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_inputs_are_not_modified(self, route_spec, two_leg_itinerary):
        history = _history(_event("Receive", "SESTO"))
        Delivery.derive_from(route_spec, two_leg_itinerary, history)
        assert len(history) == 1
        assert len(two_leg_itinerary.legs) == 2
