"""Voyage aggregate — a scheduled sequence of carrier movements."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, List, String, ValueObject

from shipping.domain import shipping
from shipping.errors import UnknownVoyageError


@shipping.value_object(part_of="Voyage")
class CarrierMovement:
    departure_location = String(required=True, max_length=5)
    arrival_location = String(required=True, max_length=5)
    departure_time = DateTime(required=True)
    arrival_time = DateTime(required=True)


@shipping.aggregate
class Voyage:
    voyage_number = Identifier(identifier=True, required=True)
    schedule = List(content_type=ValueObject(CarrierMovement))


@shipping.repository(part_of=Voyage)
class VoyageRepository:
    def lookup(self, voyage_number: str) -> Voyage:
        """Return the voyage, or raise ``UnknownVoyageError``."""
        try:
            return self.get(voyage_number)
        except ObjectNotFoundError as exc:
            raise UnknownVoyageError(voyage_number) from exc

    def list_all(self) -> list[Voyage]:
        return self._dao.query.order_by("voyage_number").limit(None).all().items
