"""Inventory ledger: the only path through which part stock changes.

The ledger works inside the caller's unit of work: parts it reserves or
restocks are staged on the Part repository and committed (or rolled back)
together with the order that caused the movement. Nothing is cached between
requests; every call reads parts through the repository.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.part.part import Part

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def __init__(self):
        self._parts = current_domain.repository_for(Part)

    def resolve(self, part_ids) -> dict:
        """Load all referenced parts in one query, keyed by part id."""
        return self._parts.find_by_ids(part_ids)

    def reserve(self, part: Part, quantity: int) -> None:
        """Decrement stock on an already-resolved part.

        Availability is checked by the caller against the same loaded part;
        the decrement is not re-validated here.
        """
        part.reserve(quantity)
        self._parts.add(part)

    def restock(self, part_id, quantity: int) -> bool:
        """Return ``quantity`` to the part's stock.

        Every call adds ``quantity``. Returns False, after logging, when the
        part has since been removed from the catalog.
        """
        try:
            part = self._parts.get(part_id)
        except ObjectNotFoundError:
            logger.warning("Skipping restock for missing part", part_id=str(part_id), quantity=quantity)
            return False

        part.restock(quantity)
        self._parts.add(part)
        return True
