"""Cargo aggregate — the unit of consistency of the shipping domain.

A Cargo owns its route specification and its itinerary. Its delivery is a
pure function of those two plus the handling history kept by the handling
side, and is re-derived by every operation that changes any of them:

    new                       empty itinerary, empty history
    specify_new_route         new route specification
    assign_to_route           new itinerary (legs must chain)
    derive_delivery_progress  new handling history
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, List, String, ValueObject

from shipping.cargo.delivery import Delivery
from shipping.cargo.events import (
    CargoArrivedAtDestination,
    CargoBooked,
    CargoMisdirected,
    CargoRouted,
    DeliveryStatusUpdated,
    RouteSpecified,
)
from shipping.cargo.handling import EMPTY_HISTORY, HandlingHistory
from shipping.cargo.itinerary import Itinerary, Leg
from shipping.cargo.route_specification import RouteSpecification
from shipping.domain import shipping


@shipping.aggregate
class Cargo:
    tracking_id = Identifier(identifier=True, required=True)
    origin = String(required=True, max_length=5)
    route_specification = ValueObject(RouteSpecification)
    legs = List(content_type=ValueObject(Leg))
    delivery = ValueObject(Delivery)
    booked_at = DateTime()
    updated_at = DateTime()

    @property
    def itinerary(self) -> Itinerary:
        return Itinerary(legs=list(self.legs or []))

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def new(cls, tracking_id: str, route_specification: RouteSpecification) -> "Cargo":
        """Book a cargo: not routed, not received, expected at its origin."""
        if not tracking_id:
            raise ValidationError({"tracking_id": ["Tracking ID is required"]})

        now = datetime.now(UTC)
        cargo = cls(
            tracking_id=tracking_id,
            origin=route_specification.origin,
            route_specification=route_specification,
            legs=[],
            delivery=Delivery.derive_from(route_specification, Itinerary(legs=[]), EMPTY_HISTORY),
            booked_at=now,
            updated_at=now,
        )
        cargo.raise_(
            CargoBooked(
                tracking_id=tracking_id,
                origin=route_specification.origin,
                destination=route_specification.destination,
                arrival_deadline=route_specification.arrival_deadline,
                booked_at=now,
            )
        )
        cargo._raise_delivery_status_updated()
        return cargo

    # -------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------
    def specify_new_route(
        self,
        route_specification: RouteSpecification,
        history: HandlingHistory | None = None,
    ) -> None:
        """Replace the route specification and re-derive delivery.

        The current itinerary is kept, so the routing status may flip to
        Misrouted. Pass the stored ``history`` to keep transport progress.
        """
        self.route_specification = route_specification
        self.raise_(
            RouteSpecified(
                tracking_id=self.tracking_id,
                origin=route_specification.origin,
                destination=route_specification.destination,
                arrival_deadline=route_specification.arrival_deadline,
            )
        )
        self._update_delivery(history)

    def assign_to_route(self, itinerary: Itinerary, history: HandlingHistory | None = None) -> None:
        """Replace the itinerary and re-derive delivery against the current route specification.

        An empty itinerary un-routes the cargo.
        """
        itinerary.validate_leg_chain()
        routed = not itinerary.is_empty()

        self.legs = list(itinerary.legs)
        self.raise_(
            CargoRouted(
                tracking_id=self.tracking_id,
                legs=json.dumps([leg.to_dict() for leg in itinerary.legs], default=str),
                leg_count=len(itinerary.legs),
                final_arrival_location=itinerary.final_arrival_location() if routed else "",
                final_arrival_time=itinerary.final_arrival_time() if routed else None,
            )
        )
        self._update_delivery(history)

    # -------------------------------------------------------------------
    # Handling progress
    # -------------------------------------------------------------------
    def derive_delivery_progress(self, history: HandlingHistory) -> None:
        """Re-derive delivery after a handling event has been recorded."""
        self._update_delivery(history)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _update_delivery(self, history: HandlingHistory | None) -> None:
        if history is None:
            history = EMPTY_HISTORY

        previous = self.delivery
        delivery = Delivery.derive_from(self.route_specification, self.itinerary, history)
        self.delivery = delivery
        self.updated_at = datetime.now(UTC)
        self._raise_delivery_status_updated()

        # Inspection: only transitions are reported, not every re-derivation.
        was_misdirected = previous is not None and previous.is_misdirected
        was_unloaded = previous is not None and previous.is_unloaded_at_destination
        if delivery.is_misdirected and not was_misdirected:
            self.raise_(
                CargoMisdirected(
                    tracking_id=self.tracking_id,
                    last_known_location=delivery.last_known_location,
                    destination=self.route_specification.destination,
                )
            )
        if delivery.is_unloaded_at_destination and not was_unloaded:
            self.raise_(
                CargoArrivedAtDestination(
                    tracking_id=self.tracking_id,
                    destination=self.route_specification.destination,
                )
            )

    def _raise_delivery_status_updated(self) -> None:
        delivery = self.delivery
        self.raise_(
            DeliveryStatusUpdated(
                tracking_id=self.tracking_id,
                routing_status=delivery.routing_status,
                transport_status=delivery.transport_status,
                current_location=delivery.current_location,
                current_voyage=delivery.current_voyage,
                last_known_location=delivery.last_known_location,
                eta=delivery.eta,
                is_misdirected=delivery.is_misdirected,
                is_unloaded_at_destination=delivery.is_unloaded_at_destination,
                next_expected_type=delivery.next_expected_type,
                next_expected_location=delivery.next_expected_location,
                next_expected_voyage=delivery.next_expected_voyage,
            )
        )
