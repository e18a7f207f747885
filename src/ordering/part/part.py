"""Part aggregate: a catalog item and its stock count.

Stock is only ever changed through ``reserve`` and ``restock``, both driven
by the inventory ledger. The aggregate's ``_version`` serves as the
optimistic-concurrency token: two units of work that load the same part and
both write it cannot both commit.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from ordering.domain import ordering
from ordering.part.events import PartAdded, PartPriceChanged, StockReserved, StockRestocked
from ordering.shared.money import to_decimal, to_float


@ordering.aggregate
class Part:
    sku = String(required=True, max_length=64, unique=True)
    name = String(required=True, max_length=150)
    description = Text()
    price = Float(required=True, min_value=0.0)
    quantity_in_stock = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, sku, name, price, quantity_in_stock=0, description=None):
        if quantity_in_stock < 0:
            raise ValidationError({"quantity_in_stock": ["Stock cannot be negative"]})

        now = datetime.now(UTC)
        part = cls(
            sku=sku,
            name=name,
            description=description,
            price=to_float(to_decimal(price)),
            quantity_in_stock=quantity_in_stock,
            created_at=now,
            updated_at=now,
        )
        part.raise_(
            PartAdded(
                part_id=str(part.id),
                sku=part.sku,
                name=part.name,
                price=part.price,
                quantity_in_stock=part.quantity_in_stock,
                added_at=now,
            )
        )
        return part

    def change_price(self, new_price):
        amount = to_decimal(new_price)
        if amount < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

        previous = self.price
        self.price = to_float(amount)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PartPriceChanged(
                part_id=str(self.id),
                previous_price=previous,
                new_price=self.price,
            )
        )

    def reserve(self, quantity):
        """Take ``quantity`` out of stock.

        The caller has already checked availability inside the same unit of
        work; the field's ``min_value`` still refuses a negative count.
        """
        self.quantity_in_stock -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReserved(
                part_id=str(self.id),
                quantity=quantity,
                remaining=self.quantity_in_stock,
            )
        )

    def restock(self, quantity):
        self.quantity_in_stock += quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockRestocked(
                part_id=str(self.id),
                quantity=quantity,
                remaining=self.quantity_in_stock,
            )
        )
