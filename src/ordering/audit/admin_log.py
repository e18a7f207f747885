"""Admin log: who changed which order, and how."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.aggregate
class AdminLog:
    timestamp = DateTime(required=True)
    performed_by_id = String(max_length=255)
    performed_by_role = String(max_length=20)
    order_id = Identifier()
    action = String(required=True, max_length=255)

    @classmethod
    def record(cls, action, order_id=None, performed_by_id=None, performed_by_role=None, timestamp=None):
        return cls(
            timestamp=timestamp or datetime.now(UTC),
            performed_by_id=performed_by_id,
            performed_by_role=performed_by_role,
            order_id=order_id,
            action=action,
        )


@ordering.repository(part_of=AdminLog)
class AdminLogRepository:
    def for_order(self, order_id) -> list[AdminLog]:
        return self._dao.query.filter(order_id=str(order_id)).order_by("timestamp").limit(None).all().items
