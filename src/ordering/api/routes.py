"""FastAPI routes for the Ordering domain: orders, customers and parts.

The upstream auth gateway resolves the caller and forwards the identity in
the ``X-User-Id`` and ``X-User-Role`` headers.
"""

import json

from fastapi import APIRouter, Header

from ordering.api.schemas import (
    AddPartRequest,
    ChangePriceRequest,
    IdResponse,
    OrderResponse,
    PlaceOrderRequest,
    RegisterCustomerRequest,
    StatusResponse,
    UpdateAddressRequest,
    UpdateOrderStatusRequest,
)
from ordering.customer.registration import RegisterCustomer, UpdateSavedAddress
from ordering.order.lifecycle import CancelOrder, UpdateOrderStatus
from ordering.order.placement import PlaceOrder
from ordering.order.queries import customer_orders, my_orders, order_detail
from ordering.part.catalog import AddPart, ChangePartPrice
from ordering.shared.processing import process

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> OrderResponse:
    command = PlaceOrder(
        caller_id=x_user_id,
        caller_role=x_user_role,
        items=json.dumps([line.model_dump() for line in body.items]),
        use_saved_address=body.use_saved_address,
        address_override=json.dumps(body.shipping_address.model_dump()) if body.shipping_address else None,
        shipping_method=body.shipping_method,
        payment_method=body.payment_method,
    )
    order_id = process(command)
    return OrderResponse(**order_detail(order_id, x_user_id, x_user_role))


@order_router.get("/mine", response_model=list[OrderResponse])
async def list_my_orders(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> list[OrderResponse]:
    return [OrderResponse(**order) for order in my_orders(x_user_id, x_user_role)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    include_history: bool = False,
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> OrderResponse:
    return OrderResponse(**order_detail(order_id, x_user_id, x_user_role, include_history=include_history))


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def cancel_order(
    order_id: str,
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> StatusResponse:
    command = CancelOrder(order_id=order_id, caller_id=x_user_id, caller_role=x_user_role)
    return StatusResponse(status=process(command))


@order_router.patch("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> StatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        caller_id=x_user_id,
        caller_role=x_user_role,
    )
    return StatusResponse(status=process(command))


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/customers", tags=["customers"])


@customer_router.post("", status_code=201, response_model=IdResponse)
async def register_customer(body: RegisterCustomerRequest) -> IdResponse:
    command = RegisterCustomer(**body.model_dump())
    return IdResponse(id=process(command))


@customer_router.put("/me/address", response_model=StatusResponse)
async def update_my_address(
    body: UpdateAddressRequest,
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> StatusResponse:
    command = UpdateSavedAddress(caller_id=x_user_id, caller_role=x_user_role, **body.model_dump())
    process(command)
    return StatusResponse()


@customer_router.get("/{customer_id}/orders", response_model=list[OrderResponse])
async def list_customer_orders(customer_id: str, x_user_role: str = Header(default="")) -> list[OrderResponse]:
    return [OrderResponse(**order) for order in customer_orders(customer_id, x_user_role)]


# ---------------------------------------------------------------------------
# Part Router
# ---------------------------------------------------------------------------
part_router = APIRouter(prefix="/parts", tags=["parts"])


@part_router.post("", status_code=201, response_model=IdResponse)
async def add_part(body: AddPartRequest, x_user_role: str = Header(default="")) -> IdResponse:
    command = AddPart(caller_role=x_user_role, **body.model_dump())
    return IdResponse(id=process(command))


@part_router.put("/{part_id}/price", response_model=StatusResponse)
async def change_part_price(
    part_id: str,
    body: ChangePriceRequest,
    x_user_role: str = Header(default=""),
) -> StatusResponse:
    command = ChangePartPrice(part_id=part_id, caller_role=x_user_role, price=body.price)
    process(command)
    return StatusResponse()
