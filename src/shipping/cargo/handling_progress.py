"""Cargo reacts to recorded handling — re-derives delivery progress.

Listens on the handling event stream. Every registered handling event makes
the cargo re-derive its delivery from the full, stored history; the
aggregate raises CargoMisdirected or CargoArrivedAtDestination when the
new delivery crosses either line.
"""

import structlog
from protean import handle
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.domain import shipping
from shipping.handling.events import HandlingEventRegistered
from shipping.handling.handling_event import HandlingEvent

logger = structlog.get_logger(__name__)


@shipping.event_handler(part_of=Cargo, stream_category="shipping::handling_event")
class CargoHandledEventHandler:
    @handle(HandlingEventRegistered)
    def cargo_was_handled(self, event: HandlingEventRegistered) -> None:
        repo = current_domain.repository_for(Cargo)
        cargo = repo.lookup(event.tracking_id)
        history = current_domain.repository_for(HandlingEvent).history_of(event.tracking_id)

        cargo.derive_delivery_progress(history)
        repo.add(cargo)

        logger.info(
            "Delivery progress derived",
            tracking_id=event.tracking_id,
            event_type=event.event_type,
            transport_status=cargo.delivery.transport_status,
            is_misdirected=cargo.delivery.is_misdirected,
        )
