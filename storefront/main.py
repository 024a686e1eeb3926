"""Storefront API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Process-wide handles (db_manager, identity, ledger, notifier) are built in
      the lifespan, stored on app.state, and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Admin page gate is middleware so it sees every /admin request before routing
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront.api.admin_gate import AdminGateMiddleware
from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import (
    admin_analytics,
    admin_customers,
    admin_orders,
    admin_products,
    admin_settings,
    admin_users,
    auth,
    cart_items,
    categories,
    health,
    order_items,
    orders,
    products,
    seed,
    transactions,
)
from storefront.config import get_settings
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.infrastructure.identity import JwtIdentityProvider
from storefront.infrastructure.ledger import SimulatedPaymentLedger
from storefront.infrastructure.notifier import LoggingResetNotifier
from storefront.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.identity = JwtIdentityProvider(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        token_ttl_seconds=settings.session_token_ttl_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    app.state.ledger = SimulatedPaymentLedger(seed=settings.ledger_seed)
    app.state.notifier = LoggingResetNotifier(settings.password_reset_url)
    logger.info("Storefront API started")
    yield
    logger.info("Storefront API shutting down")
    await app.state.db_manager.close()


app = FastAPI(
    title="TrendifyMart Storefront API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    AdminGateMiddleware, cookie_name=settings.session_cookie_name,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(orders.router)
app.include_router(admin_orders.router)
app.include_router(admin_analytics.router)
app.include_router(admin_customers.router)
app.include_router(admin_products.router)
app.include_router(admin_users.router)
app.include_router(admin_settings.router)
app.include_router(order_items.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(cart_items.router)
app.include_router(transactions.router)
app.include_router(seed.router)

register_error_handlers(app, expose_internal_errors=settings.expose_internal_errors)

# Static files: serves the storefront build in production
# mounted AFTER API routes so /api/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
