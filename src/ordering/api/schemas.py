"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class ShippingOverrideSchema(AddressSchema):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


class OrderLineSchema(BaseModel):
    part_id: str
    # Non-positive quantities are reported by the domain as InvalidQuantity
    quantity: int


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    items: list[OrderLineSchema] = Field(default_factory=list)
    use_saved_address: bool = True
    shipping_address: ShippingOverrideSchema | None = None
    shipping_method: str | None = None
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"part_id": "part-001", "quantity": 2}],
                    "use_saved_address": False,
                    "shipping_address": {
                        "address_line1": "12 Garage Lane",
                        "city": "Leeds",
                        "postal_code": "LS1 4AP",
                        "country": "UK",
                    },
                    "payment_method": "Cash",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Customer and Part Request Schemas
# ---------------------------------------------------------------------------
class RegisterCustomerRequest(AddressSchema):
    user_id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


class UpdateAddressRequest(AddressSchema):
    phone: str | None = None


class AddPartRequest(BaseModel):
    sku: str
    name: str
    description: str | None = None
    price: float = Field(ge=0)
    quantity_in_stock: int = Field(ge=0, default=0)


class ChangePriceRequest(BaseModel):
    price: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    part_id: str
    part_name: str | None = None
    sku: str | None = None
    unit_price: float
    quantity: int
    line_total: float


class StatusHistoryResponse(BaseModel):
    status: str
    changed_at: datetime


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    created_at: datetime | None = None
    subtotal: float
    tax: float
    total: float
    status: str
    payment_method: str
    shipping_method: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    items: list[OrderItemResponse]
    status_history: list[StatusHistoryResponse] | None = None


class IdResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"
