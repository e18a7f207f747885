"""Domain events for the Part aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Part")
class PartAdded:
    """A new part was added to the catalog with its opening stock."""

    __version__ = 1

    part_id = Identifier(required=True)
    sku = String(required=True)
    name = String(required=True)
    price = Float(required=True)
    quantity_in_stock = Integer(required=True)
    added_at = DateTime(required=True)


@ordering.event(part_of="Part")
class PartPriceChanged:
    """The catalog price changed. Existing orders keep their unit price."""

    __version__ = 1

    part_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@ordering.event(part_of="Part")
class StockReserved:
    """Stock was taken for an order."""

    __version__ = 1

    part_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@ordering.event(part_of="Part")
class StockRestocked:
    """Previously reserved stock was returned, e.g. on order cancellation."""

    __version__ = 1

    part_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
