"""Mounting the storefront routers and error handlers on a FastAPI app."""

from fastapi import FastAPI

from storefront.api.admin import admin_router
from storefront.api.cart import cart_router
from storefront.api.catalogue import category_router, product_router
from storefront.api.errors import register_error_handlers
from storefront.api.orders import order_router
from storefront.api.users import auth_router, user_router

ROUTERS = [auth_router, user_router, category_router, product_router, cart_router, order_router, admin_router]


def mount(app: FastAPI) -> FastAPI:
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return app
