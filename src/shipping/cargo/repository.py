"""Repository for the Cargo aggregate."""

from protean.exceptions import ObjectNotFoundError

from shipping.cargo.cargo import Cargo
from shipping.domain import shipping
from shipping.errors import UnknownCargoError


@shipping.repository(part_of=Cargo)
class CargoRepository:
    def lookup(self, tracking_id: str) -> Cargo:
        """Return the cargo, or raise ``UnknownCargoError``."""
        try:
            return self.get(tracking_id)
        except ObjectNotFoundError as exc:
            raise UnknownCargoError(tracking_id) from exc

    def list_all(self) -> list[Cargo]:
        return self._dao.query.order_by("booked_at").limit(None).all().items
