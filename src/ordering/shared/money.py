"""Currency helpers.

Amounts are stored in Float fields but every calculation happens on
``Decimal`` values quantized to cents. Stored floats always originate from a
two-decimal ``Decimal``, so ``str()`` recovers the exact amount.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(amount) -> Decimal:
    """Convert a stored or user-supplied amount to a cent-precision Decimal.

    Uses round-half-away-from-zero (``ROUND_HALF_UP`` in the decimal module).
    """
    if amount is None:
        return ZERO
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def to_float(amount: Decimal) -> float:
    return float(amount.quantize(CENT, rounding=ROUND_HALF_UP))
