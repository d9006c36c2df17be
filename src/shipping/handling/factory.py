"""Handling event factory — validates a reported handling against known entities.

The factory only checks and constructs. Storing the event and notifying
the cargo side is the job of the registration handler.
"""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError, ValidationError

from shipping.cargo.handling import HandlingEventType
from shipping.errors import UnknownCargoError, UnknownLocationError, UnknownVoyageError
from shipping.handling.handling_event import HandlingEvent


class HandlingEventFactory:
    """Builds HandlingEvents for cargos, voyages and locations that exist.

    Each lookup is anything with a ``get(identifier)`` method that raises
    ``ObjectNotFoundError`` for unknown identifiers, typically the Protean
    repositories of Cargo, Voyage and Location.
    """

    def __init__(self, cargo_lookup, voyage_lookup, location_lookup):
        self.cargo_lookup = cargo_lookup
        self.voyage_lookup = voyage_lookup
        self.location_lookup = location_lookup

    def create_handling_event(
        self,
        registration_time: datetime,
        completion_time: datetime,
        tracking_id: str,
        voyage_number: str,
        unlocode: str,
        event_type: HandlingEventType | str,
    ) -> HandlingEvent:
        """Return an unsaved HandlingEvent.

        Checks run in a fixed order: cargo, then voyage (only when a voyage
        number is given), then location. An unknown event type is rejected
        with a ``ValidationError`` before any lookup.
        """
        try:
            event_type = HandlingEventType(event_type)
        except ValueError as exc:
            raise ValidationError({"event_type": [f"Unknown handling event type: {event_type}"]}) from exc

        try:
            self.cargo_lookup.get(tracking_id)
        except ObjectNotFoundError as exc:
            raise UnknownCargoError(tracking_id) from exc

        if voyage_number:
            try:
                self.voyage_lookup.get(voyage_number)
            except ObjectNotFoundError as exc:
                raise UnknownVoyageError(voyage_number) from exc

        try:
            self.location_lookup.get(unlocode)
        except ObjectNotFoundError as exc:
            raise UnknownLocationError(unlocode) from exc

        return HandlingEvent(
            tracking_id=tracking_id,
            event_type=event_type.value,
            location=unlocode,
            voyage_number=voyage_number or "",
            completion_time=completion_time,
            registration_time=registration_time,
        )
