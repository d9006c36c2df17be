"""Location aggregate — a port or terminal identified by its UN/LOCODE."""

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shipping.domain import shipping
from shipping.errors import UnknownLocationError
from shipping.identifiers import is_valid_unlocode
from shipping.utils.logging import log_call


@shipping.aggregate
class Location:
    unlocode = Identifier(identifier=True, required=True)
    name = String(required=True, max_length=100)

    @invariant.post
    def unlocode_must_be_valid(self):
        if not is_valid_unlocode(self.unlocode):
            raise ValidationError({"unlocode": [f"{self.unlocode} is not a valid UN/LOCODE"]})


@shipping.repository(part_of=Location)
class LocationRepository:
    def lookup(self, unlocode: str) -> Location:
        """Return the location, or raise ``UnknownLocationError``."""
        try:
            return self.get(unlocode)
        except ObjectNotFoundError as exc:
            raise UnknownLocationError(unlocode) from exc

    def list_all(self) -> list[Location]:
        return self._dao.query.order_by("unlocode").limit(None).all().items


@log_call("list_locations")
def list_locations() -> list[Location]:
    return current_domain.repository_for(Location).list_all()
