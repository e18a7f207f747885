"""Audit recorder: writes one admin-log entry per order lifecycle change.

The audit trail is best-effort: a failure here is logged and never reaches
the caller whose status change or cancellation has already been decided.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.audit.admin_log import AdminLog
from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderStatusChanged

logger = structlog.get_logger(__name__)


def cancelled_action(order_id) -> str:
    return f"Cancelled order #{order_id}"


def status_changed_action(order_id, status) -> str:
    return f"Changed order #{order_id} status to {status}"


@ordering.event_handler(part_of=AdminLog, stream_category="ordering::order")
class AuditLogRecorder:
    def _record(self, action, event, at) -> None:
        try:
            current_domain.repository_for(AdminLog).add(
                AdminLog.record(
                    action=action,
                    order_id=str(event.order_id),
                    performed_by_id=event.performed_by_id,
                    performed_by_role=event.performed_by_role,
                    timestamp=at,
                )
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to record admin action", action=action, error=str(exc), exc_info=True)

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        self._record(status_changed_action(event.order_id, event.new_status), event, event.changed_at)

    @handle(OrderCancelled)
    def on_cancelled(self, event: OrderCancelled) -> None:
        self._record(cancelled_action(event.order_id), event, event.cancelled_at)
