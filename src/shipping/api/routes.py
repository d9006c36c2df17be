"""FastAPI routes for the Shipping domain."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from shipping.api.schemas import (
    AssignRouteRequest,
    BookCargoRequest,
    CargoListResponse,
    CargoResponse,
    ChangeDestinationRequest,
    DeliveryResponse,
    HandlingEventIdResponse,
    ItineraryResponse,
    LegResponse,
    LocationListResponse,
    LocationResponse,
    NextExpectedActivityResponse,
    RegisterHandlingEventRequest,
    RouteCandidatesResponse,
    StatusResponse,
    TrackedEventResponse,
    TrackingIdResponse,
    TrackingResponse,
)
from shipping.cargo.booking import BookNewCargo
from shipping.cargo.destination import ChangeDestination
from shipping.cargo.queries import list_cargos, load_cargo
from shipping.cargo.route_assignment import AssignCargoToRoute, request_possible_routes_for_cargo
from shipping.handling.registration import RegisterHandlingEvent
from shipping.location.location import list_locations
from shipping.projections.cargo_tracking import track


def _leg_response(leg) -> LegResponse:
    return LegResponse(
        voyage_number=leg.voyage_number,
        load_location=leg.load_location,
        unload_location=leg.unload_location,
        load_time=leg.load_time,
        unload_time=leg.unload_time,
    )


def _cargo_response(cargo) -> CargoResponse:
    delivery = cargo.delivery
    expected = delivery.next_expected_activity
    return CargoResponse(
        tracking_id=str(cargo.tracking_id),
        origin=cargo.route_specification.origin,
        destination=cargo.route_specification.destination,
        arrival_deadline=cargo.route_specification.arrival_deadline,
        legs=[_leg_response(leg) for leg in cargo.legs or []],
        delivery=DeliveryResponse(
            routing_status=delivery.routing_status,
            transport_status=delivery.transport_status,
            current_location=delivery.current_location,
            current_voyage=delivery.current_voyage,
            last_known_location=delivery.last_known_location,
            eta=delivery.eta,
            is_misdirected=bool(delivery.is_misdirected),
            is_unloaded_at_destination=bool(delivery.is_unloaded_at_destination),
            next_expected_activity=(
                NextExpectedActivityResponse(
                    event_type=expected.event_type,
                    location=expected.location,
                    voyage_number=expected.voyage_number or "",
                )
                if expected is not None
                else None
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Booking Router
# ---------------------------------------------------------------------------
cargo_router = APIRouter(prefix="/cargos", tags=["booking"])


@cargo_router.post("", status_code=201, response_model=TrackingIdResponse)
async def book_new_cargo(body: BookCargoRequest) -> TrackingIdResponse:
    """Book a new cargo between two known locations."""
    command = BookNewCargo(
        origin=body.origin,
        destination=body.destination,
        arrival_deadline=body.arrival_deadline,
    )
    result = current_domain.process(command, asynchronous=False)
    return TrackingIdResponse(tracking_id=result)


@cargo_router.get("", response_model=CargoListResponse)
async def get_cargos() -> CargoListResponse:
    """All booked cargos, oldest booking first."""
    return CargoListResponse(cargos=[_cargo_response(cargo) for cargo in list_cargos()])


@cargo_router.get("/{tracking_id}", response_model=CargoResponse)
async def get_cargo(tracking_id: str) -> CargoResponse:
    return _cargo_response(load_cargo(tracking_id))


@cargo_router.get("/{tracking_id}/routes", response_model=RouteCandidatesResponse)
async def request_routes(tracking_id: str) -> RouteCandidatesResponse:
    """Candidate itineraries satisfying the cargo's route specification."""
    itineraries = request_possible_routes_for_cargo(tracking_id)
    return RouteCandidatesResponse(
        routes=[ItineraryResponse(legs=[_leg_response(leg) for leg in itinerary.legs]) for itinerary in itineraries]
    )


@cargo_router.put("/{tracking_id}/route", response_model=StatusResponse)
async def assign_to_route(tracking_id: str, body: AssignRouteRequest) -> StatusResponse:
    """Assign the cargo to an itinerary."""
    command = AssignCargoToRoute(
        tracking_id=tracking_id,
        legs=json.dumps([leg.model_dump(mode="json") for leg in body.legs]),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="routed")


@cargo_router.put("/{tracking_id}/destination", response_model=StatusResponse)
async def change_destination(tracking_id: str, body: ChangeDestinationRequest) -> StatusResponse:
    """Change the destination, keeping origin and arrival deadline."""
    command = ChangeDestination(tracking_id=tracking_id, destination=body.destination)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="destination_changed")


# ---------------------------------------------------------------------------
# Handling Router
# ---------------------------------------------------------------------------
handling_router = APIRouter(prefix="/handling-events", tags=["handling"])


@handling_router.post("", status_code=201, response_model=HandlingEventIdResponse)
async def register_handling_event(body: RegisterHandlingEventRequest) -> HandlingEventIdResponse:
    """Register a handling event reported by a port or terminal."""
    command = RegisterHandlingEvent(
        completion_time=body.completion_time,
        tracking_id=body.tracking_id,
        voyage_number=body.voyage_number,
        location=body.location,
        event_type=body.event_type,
    )
    result = current_domain.process(command, asynchronous=False)
    return HandlingEventIdResponse(handling_event_id=result)


# ---------------------------------------------------------------------------
# Tracking Router
# ---------------------------------------------------------------------------
tracking_router = APIRouter(prefix="/tracking", tags=["tracking"])


@tracking_router.get("/{tracking_id}", response_model=TrackingResponse)
async def track_cargo(tracking_id: str) -> TrackingResponse:
    """Customer-facing tracking view of a cargo."""
    view = track(tracking_id)
    events = json.loads(view.events_json) if view.events_json else []
    return TrackingResponse(
        tracking_id=str(view.tracking_id),
        origin=view.origin,
        destination=view.destination,
        arrival_deadline=view.arrival_deadline,
        routing_status=view.routing_status,
        transport_status=view.transport_status,
        status_text=view.status_text,
        last_known_location=view.last_known_location,
        current_voyage=view.current_voyage,
        eta=view.eta,
        next_expected_activity=view.next_expected_activity,
        is_misdirected=bool(view.is_misdirected),
        leg_count=view.leg_count or 0,
        events=[TrackedEventResponse(**event) for event in events],
    )


# ---------------------------------------------------------------------------
# Location Router
# ---------------------------------------------------------------------------
location_router = APIRouter(prefix="/locations", tags=["locations"])


@location_router.get("", response_model=LocationListResponse)
async def get_locations() -> LocationListResponse:
    return LocationListResponse(
        locations=[LocationResponse(unlocode=str(loc.unlocode), name=loc.name) for loc in list_locations()]
    )
