from ordering.customer.customer import Customer
from ordering.domain import ordering


@ordering.repository(part_of=Customer)
class CustomerRepository:
    def find_by_user_id(self, user_id) -> Customer | None:
        if not user_id:
            return None
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        return results[0] if results else None
