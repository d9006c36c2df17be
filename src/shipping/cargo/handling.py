"""Handling activity types and the handling history of a cargo."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from protean.fields import String

from shipping.domain import shipping
from shipping.errors import EmptyHistoryError


class HandlingEventType(Enum):
    NOT_HANDLED = "Not Handled"
    LOAD = "Load"
    UNLOAD = "Unload"
    RECEIVE = "Receive"
    CLAIM = "Claim"
    CUSTOMS = "Customs"


@shipping.value_object(part_of="Cargo")
class HandlingActivity:
    """What happened (or is expected to happen) to a cargo, where, and on which voyage."""

    event_type = String(required=True, max_length=20, choices=HandlingEventType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20, default="")


@dataclass(frozen=True)
class HandlingHistory:
    """Handling events of one cargo, in registration order (most recent last).

    Events only need an ``activity`` attribute, so stored ``HandlingEvent``
    aggregates and plain test doubles both work.
    """

    events: tuple = ()

    @classmethod
    def of(cls, events) -> "HandlingHistory":
        return cls(events=tuple(events))

    def is_empty(self) -> bool:
        return len(self.events) == 0

    def most_recently_completed_event(self):
        if self.is_empty():
            raise EmptyHistoryError("delivery history is empty")
        return self.events[-1]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator:
        return iter(self.events)


EMPTY_HISTORY = HandlingHistory()
