"""Storefront HTTP API package."""

from storefront.api.routes import auth_router, product_router, user_router

__all__ = ["auth_router", "product_router", "user_router"]
