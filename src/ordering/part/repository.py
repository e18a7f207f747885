"""Repository for the Part aggregate."""

from ordering.domain import ordering
from ordering.part.part import Part


@ordering.repository(part_of=Part)
class PartRepository:
    def find_by_ids(self, part_ids) -> dict:
        """Load every part in ``part_ids`` with a single query, keyed by id.

        Unknown ids are simply absent from the result.
        """
        ids = list(dict.fromkeys(str(part_id) for part_id in part_ids))
        if not ids:
            return {}
        parts = self._dao.query.filter(id__in=ids).limit(None).all().items
        return {str(part.id): part for part in parts}

    def find_by_sku(self, sku: str) -> Part | None:
        results = self._dao.query.filter(sku=sku).all().items
        return results[0] if results else None
