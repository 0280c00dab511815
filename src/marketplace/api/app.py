"""Application factory for the marketplace HTTP API.

``build_app`` wires routers, error handlers and middlewares around the
collaborators it is given; it holds no module-level state of its own.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.api.analytics import analytics_router
from marketplace.api.errors import register_error_handlers
from marketplace.api.middleware import install_middlewares
from marketplace.api.notifications import notification_router
from marketplace.api.orders import order_router
from marketplace.api.products import product_router
from marketplace.api.users import auth_router, user_router
from marketplace.domain import marketplace
from marketplace.identity import IdentityProvider


def build_app(identity_provider: IdentityProvider) -> FastAPI:
    app = FastAPI(
        title="Artisan Marketplace API",
        description="Marketplace connecting artisans and customers: products, orders, reviews and notifications",
    )
    app.state.identity_provider = identity_provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_middlewares(app)
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(notification_router)
    app.include_router(analytics_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "domain": marketplace.name}

    return app
