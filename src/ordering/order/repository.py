from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_for_customer(self, customer_id) -> list[Order]:
        """All orders placed by ``customer_id``, newest first."""
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").limit(None).all().items
