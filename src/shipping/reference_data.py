"""Reference data — locations and voyages known to the shipping domain.

The sample data lives in ``domain.toml`` under ``[custom]`` and is exposed
by Protean as domain attributes. ``seed_reference_data`` stores it through
the Location and Voyage repositories once, at start-up or per test.
"""

import structlog
from protean.utils.globals import current_domain

from shipping.location.location import Location
from shipping.voyage.voyage import CarrierMovement, Voyage

logger = structlog.get_logger(__name__)


def seed_reference_data(locations: dict | None = None, voyages: dict | None = None) -> tuple[int, int]:
    """Store configured locations and voyages that are not stored yet.

    ``locations`` maps UN/LOCODE to name; ``voyages`` maps voyage number to
    a list of carrier movement dicts. Both default to the domain's
    ``sample_locations`` and ``sample_voyages`` settings. Returns the
    number of locations and voyages added.
    """
    if locations is None:
        locations = getattr(current_domain, "sample_locations", {}) or {}
    if voyages is None:
        voyages = getattr(current_domain, "sample_voyages", {}) or {}

    location_repo = current_domain.repository_for(Location)
    added_locations = 0
    for unlocode, name in locations.items():
        if location_repo.get_or_none(unlocode) is None:
            location_repo.add(Location(unlocode=unlocode, name=name))
            added_locations += 1

    voyage_repo = current_domain.repository_for(Voyage)
    added_voyages = 0
    for voyage_number, movements in voyages.items():
        if voyage_repo.get_or_none(voyage_number) is None:
            voyage_repo.add(
                Voyage(
                    voyage_number=voyage_number,
                    schedule=[CarrierMovement(**movement) for movement in movements],
                )
            )
            added_voyages += 1

    logger.info(
        "Reference data seeded",
        locations_added=added_locations,
        voyages_added=added_voyages,
    )
    return added_locations, added_voyages
