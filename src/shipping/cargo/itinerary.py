"""Itinerary — the planned legs a cargo travels on."""

from protean.fields import DateTime, List, String, ValueObject

from shipping.cargo.handling import HandlingEventType
from shipping.domain import shipping
from shipping.errors import EmptyItineraryError, InvalidItineraryError


@shipping.value_object(part_of="Cargo")
class Leg:
    """One carrier movement of a cargo on a voyage."""

    voyage_number = String(max_length=20, default="")  # empty while the voyage is unassigned
    load_location = String(required=True, max_length=5)
    unload_location = String(required=True, max_length=5)
    load_time = DateTime(required=True)
    unload_time = DateTime(required=True)


@shipping.value_object(part_of="Cargo")
class Itinerary:
    """An ordered sequence of legs. No legs means the cargo is not routed yet."""

    legs = List(content_type=ValueObject(Leg))

    def is_empty(self) -> bool:
        return not self.legs

    def initial_departure_location(self) -> str:
        if self.is_empty():
            return ""
        return self.legs[0].load_location

    def final_arrival_location(self) -> str:
        if self.is_empty():
            raise EmptyItineraryError("itinerary has no legs")
        return self.legs[-1].unload_location

    def final_arrival_time(self):
        if self.is_empty():
            raise EmptyItineraryError("itinerary has no legs")
        return self.legs[-1].unload_time

    def is_expected(self, event) -> bool:
        """Whether ``event`` conforms to this itinerary.

        An empty itinerary expects everything. Load and Unload must match a
        leg on both location and voyage; Customs is never constrained.
        """
        if self.is_empty():
            return True

        activity = event.activity
        event_type = HandlingEventType(activity.event_type)

        if event_type == HandlingEventType.RECEIVE:
            return self.initial_departure_location() == activity.location
        if event_type == HandlingEventType.LOAD:
            return any(
                leg.load_location == activity.location and leg.voyage_number == activity.voyage_number
                for leg in self.legs
            )
        if event_type == HandlingEventType.UNLOAD:
            return any(
                leg.unload_location == activity.location and leg.voyage_number == activity.voyage_number
                for leg in self.legs
            )
        if event_type == HandlingEventType.CLAIM:
            return self.final_arrival_location() == activity.location

        return True

    def validate_leg_chain(self) -> None:
        """Raise ``InvalidItineraryError`` unless each leg starts where the previous one ended."""
        for index, (previous, following) in enumerate(zip(self.legs, self.legs[1:]), start=1):
            if previous.unload_location != following.load_location:
                raise InvalidItineraryError(
                    {
                        "legs": [
                            f"Leg {index} loads at {following.load_location} but leg {index - 1} "
                            f"unloads at {previous.unload_location}"
                        ]
                    }
                )


def itinerary_from_dicts(legs_data: list[dict]) -> Itinerary:
    """Build an itinerary from plain leg dicts (as carried by commands and API payloads)."""
    return Itinerary(legs=[Leg(**leg_data) for leg_data in legs_data])
