"""Ordering domain API package."""

from ordering.api.routes import delivery_router, order_router

__all__ = ["order_router", "delivery_router"]
