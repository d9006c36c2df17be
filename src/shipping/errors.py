"""Error kinds raised by the shipping domain.

Each error extends the Protean exception that already carries the right
HTTP mapping in ``protean.integrations.fastapi``: lookups are
``ObjectNotFoundError`` (404), bad input is ``ValidationError`` (400) and
operations that cannot be answered from the current state are
``InvalidOperationError`` (422).
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


class UnknownCargoError(ObjectNotFoundError):
    def __init__(self, tracking_id: str) -> None:
        super().__init__(f"unknown cargo: {tracking_id}")
        self.tracking_id = tracking_id


class UnknownVoyageError(ObjectNotFoundError):
    def __init__(self, voyage_number: str) -> None:
        super().__init__(f"unknown voyage: {voyage_number}")
        self.voyage_number = voyage_number


class UnknownLocationError(ObjectNotFoundError):
    def __init__(self, unlocode: str) -> None:
        super().__init__(f"unknown location: {unlocode}")
        self.unlocode = unlocode


class InvalidItineraryError(ValidationError):
    """Raised when an itinerary's legs do not form a connected chain."""


class EmptyItineraryError(InvalidOperationError):
    """Raised when the final arrival of an itinerary without legs is requested."""


class EmptyHistoryError(InvalidOperationError):
    """Raised when the most recent event of an empty handling history is requested."""
