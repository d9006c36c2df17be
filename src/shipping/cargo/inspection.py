"""Cargo inspection notifications.

Reports cargos that went off-plan or reached their destination. This is
the outbound edge of the domain: a real deployment would page an operator
or notify the customer here.
"""

import structlog
from protean import handle

from shipping.cargo.cargo import Cargo
from shipping.cargo.events import CargoArrivedAtDestination, CargoMisdirected
from shipping.domain import shipping

logger = structlog.get_logger(__name__)


@shipping.event_handler(part_of=Cargo)
class CargoInspectionEventHandler:
    @handle(CargoMisdirected)
    def on_cargo_misdirected(self, event: CargoMisdirected) -> None:
        logger.warning(
            "Cargo misdirected",
            tracking_id=event.tracking_id,
            last_known_location=event.last_known_location,
            destination=event.destination,
        )

    @handle(CargoArrivedAtDestination)
    def on_cargo_arrived(self, event: CargoArrivedAtDestination) -> None:
        logger.info(
            "Cargo has arrived",
            tracking_id=event.tracking_id,
            destination=event.destination,
        )
