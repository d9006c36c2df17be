"""HandlingEvent aggregate — an immutable, append-only fact about a cargo.

Each registered event carries a per-cargo ``sequence`` so the handling
history of a cargo can be read back in registration order.
"""

from protean.fields import DateTime, Identifier, Integer, String

from shipping.cargo.handling import HandlingActivity, HandlingEventType, HandlingHistory
from shipping.domain import shipping
from shipping.handling.events import HandlingEventRegistered


@shipping.aggregate
class HandlingEvent:
    tracking_id = Identifier(required=True)
    event_type = String(required=True, max_length=20, choices=HandlingEventType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20, default="")
    completion_time = DateTime(required=True)
    registration_time = DateTime(required=True)
    sequence = Integer(default=0)

    @property
    def activity(self) -> HandlingActivity:
        return HandlingActivity(
            event_type=self.event_type,
            location=self.location,
            voyage_number=self.voyage_number or "",
        )

    def record(self, sequence: int) -> None:
        """Stamp the event with its position in the cargo's history and announce it."""
        self.sequence = sequence
        self.raise_(
            HandlingEventRegistered(
                handling_event_id=str(self.id),
                tracking_id=self.tracking_id,
                event_type=self.event_type,
                location=self.location,
                voyage_number=self.voyage_number or "",
                completion_time=self.completion_time,
                registration_time=self.registration_time,
                sequence=sequence,
            )
        )


@shipping.repository(part_of=HandlingEvent)
class HandlingEventRepository:
    def history_of(self, tracking_id: str) -> HandlingHistory:
        """All events recorded for ``tracking_id``, oldest first."""
        events = self._dao.query.filter(tracking_id=tracking_id).order_by("sequence").limit(None).all().items
        return HandlingHistory.of(events)

    def next_sequence_for(self, tracking_id: str) -> int:
        return len(self.history_of(tracking_id)) + 1
