"""Route specification — where a cargo must go and by when."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from shipping.domain import shipping


@shipping.value_object(part_of="Cargo")
class RouteSpecification:
    """Required origin, destination and arrival deadline of a cargo.

    The deadline is carried as data only. It plays no part in deciding
    whether an itinerary satisfies the specification.
    """

    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)

    @invariant.post
    def origin_and_destination_must_differ(self):
        if self.origin == self.destination:
            raise ValidationError({"destination": ["Destination must differ from origin"]})

    def is_satisfied_by(self, itinerary) -> bool:
        return (
            not itinerary.is_empty()
            and itinerary.initial_departure_location() == self.origin
            and itinerary.final_arrival_location() == self.destination
        )
