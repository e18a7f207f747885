"""Catalog maintenance: adding parts and changing their price."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.part.part import Part
from ordering.shared import errors
from ordering.shared.access import STAFF_ROLES, require_role

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Part")
class AddPart:
    caller_role = String(max_length=20)
    sku = String(required=True, max_length=64)
    name = String(required=True, max_length=150)
    description = Text()
    price = Float(required=True, min_value=0.0)
    quantity_in_stock = Integer(default=0)


@ordering.command(part_of="Part")
class ChangePartPrice:
    caller_role = String(max_length=20)
    part_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)


@ordering.command_handler(part_of=Part)
class CatalogHandler:
    @handle(AddPart)
    def add_part(self, command):
        require_role(command.caller_role, *STAFF_ROLES)

        repo = current_domain.repository_for(Part)
        if repo.find_by_sku(command.sku) is not None:
            raise ValidationError({"sku": [f"A part with SKU {command.sku!r} already exists"]})

        part = Part.add(
            sku=command.sku,
            name=command.name,
            description=command.description,
            price=command.price,
            quantity_in_stock=command.quantity_in_stock or 0,
        )
        repo.add(part)
        logger.info("Part added", part_id=str(part.id), sku=part.sku, stock=part.quantity_in_stock)
        return str(part.id)

    @handle(ChangePartPrice)
    def change_price(self, command):
        require_role(command.caller_role, *STAFF_ROLES)

        repo = current_domain.repository_for(Part)
        try:
            part = repo.get(command.part_id)
        except ObjectNotFoundError:
            raise errors.PartNotFound(command.part_id) from None
        part.change_price(command.price)
        repo.add(part)
