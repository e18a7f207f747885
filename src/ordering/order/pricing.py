"""Order pricing: subtotal, tax and total from priced lines.

Tax is charged at a flat rate on the subtotal and rounded half away from
zero to cents. Totals are computed once, when the order is placed.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ordering.shared.money import CENT, ZERO, to_decimal

TAX_RATE = Decimal("0.20")


@dataclass(frozen=True)
class PricedLine:
    """One order line with its unit price captured from the catalog."""

    part_id: str
    part_name: str
    sku: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def calculate_tax(subtotal: Decimal) -> Decimal:
    return (subtotal * TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_totals(lines) -> OrderTotals:
    """Price ``lines`` (anything with ``unit_price`` and ``quantity``)."""
    subtotal = sum((to_decimal(line.unit_price) * line.quantity for line in lines), ZERO)
    tax = calculate_tax(subtotal)
    return OrderTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)
