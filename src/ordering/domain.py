"""Ordering bounded context: parts inventory, customers and order processing.

Handles the catalog's stock ledger, customer shipping profiles, order
placement with atomic stock reservation, and the order status lifecycle
with restocking on cancellation.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")
