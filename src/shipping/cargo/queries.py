"""Read-side use cases over booked cargos."""

from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.utils.logging import log_call


@log_call("load", "tracking_id")
def load_cargo(tracking_id: str) -> Cargo:
    """The cargo, or ``UnknownCargoError``."""
    return current_domain.repository_for(Cargo).lookup(tracking_id)


@log_call("list_cargos")
def list_cargos() -> list[Cargo]:
    return current_domain.repository_for(Cargo).list_all()
