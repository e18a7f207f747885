"""Ordering domain API package."""

from ordering.api.errors import register_error_handlers
from ordering.api.routes import customer_router, order_router, part_router

__all__ = ["order_router", "customer_router", "part_router", "register_error_handlers"]
