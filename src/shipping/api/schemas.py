"""Pydantic API schemas for the Shipping domain.

These are the external API contracts — separate from domain commands.
The API layer translates between these schemas and domain commands.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class BookCargoRequest(BaseModel):
    origin: str
    destination: str
    arrival_deadline: datetime


class LegRequest(BaseModel):
    voyage_number: str = ""
    load_location: str
    unload_location: str
    load_time: datetime
    unload_time: datetime


class AssignRouteRequest(BaseModel):
    legs: list[LegRequest]


class ChangeDestinationRequest(BaseModel):
    destination: str


class RegisterHandlingEventRequest(BaseModel):
    completion_time: datetime
    tracking_id: str
    voyage_number: str = ""
    location: str
    event_type: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class TrackingIdResponse(BaseModel):
    tracking_id: str


class HandlingEventIdResponse(BaseModel):
    handling_event_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class LegResponse(BaseModel):
    voyage_number: str
    load_location: str
    unload_location: str
    load_time: datetime
    unload_time: datetime


class ItineraryResponse(BaseModel):
    legs: list[LegResponse]


class RouteCandidatesResponse(BaseModel):
    routes: list[ItineraryResponse]


class NextExpectedActivityResponse(BaseModel):
    event_type: str
    location: str
    voyage_number: str = ""


class DeliveryResponse(BaseModel):
    routing_status: str
    transport_status: str
    current_location: str | None = None
    current_voyage: str | None = None
    last_known_location: str | None = None
    eta: datetime | None = None
    is_misdirected: bool = False
    is_unloaded_at_destination: bool = False
    next_expected_activity: NextExpectedActivityResponse | None = None


class CargoResponse(BaseModel):
    tracking_id: str
    origin: str
    destination: str
    arrival_deadline: datetime
    legs: list[LegResponse]
    delivery: DeliveryResponse


class CargoListResponse(BaseModel):
    cargos: list[CargoResponse]


class TrackedEventResponse(BaseModel):
    event_type: str
    location: str
    voyage_number: str = ""
    completion_time: str
    description: str


class TrackingResponse(BaseModel):
    tracking_id: str
    origin: str
    destination: str
    arrival_deadline: datetime | None = None
    routing_status: str | None = None
    transport_status: str | None = None
    status_text: str | None = None
    last_known_location: str | None = None
    current_voyage: str | None = None
    eta: datetime | None = None
    next_expected_activity: str | None = None
    is_misdirected: bool = False
    leg_count: int = 0
    events: list[TrackedEventResponse]


class LocationResponse(BaseModel):
    unlocode: str
    name: str


class LocationListResponse(BaseModel):
    locations: list[LocationResponse]
