"""Shipping bounded context — Cargo Booking, Handling and Tracking.

Tracks a cargo from booking through routing, port handling and claim. The
Cargo aggregate is the unit of consistency: its delivery status is always
re-derived from the route specification, the assigned itinerary and the
handling history recorded against it.
"""

from protean.domain import Domain

shipping = Domain(name="shipping")
