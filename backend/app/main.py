from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.error_handling import register_exception_handlers
from app.startup import (
    configure_startup_logging,
    recompute_timers_on_startup,
    run_startup_checks,
)

# ========== Authentication ==========
from modules.auth.routes.auth_routes import router as auth_router

# ========== Menu ==========
from modules.menu.routes.menu_routes import router as menu_router

# ========== Orders ==========
from modules.orders.routes.order_routes import router as order_router

# ========== Loyalty ==========
from modules.loyalty.routes.loyalty_routes import router as loyalty_router

# ========== Timers ==========
from modules.timers.routes.timer_routes import router as timer_router

# ========== Notifications ==========
from modules.notifications.routes.telegram_routes import router as telegram_router

app = FastAPI(
    title="Kaskroutek - Sandwich Shop API",
    description="""
    Ordering backend for a sandwich shop.

    ## Features

    * **Menu** - Breads and toppings with English/French names
    * **Orders** - Checkout with cash or loyalty points, admin status changes
    * **Loyalty** - Points balances per phone number with a full transaction log
    * **Timers** - Weekly pickup and shipping slots with live availability
    * **Notifications** - Telegram alerts for new orders

    ## Authentication

    Admin endpoints require a bearer token. Use `/api/auth/login` to obtain one.
    """,
    version="1.0.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(menu_router)
app.include_router(order_router)
app.include_router(loyalty_router)
app.include_router(timer_router)
app.include_router(telegram_router)


@app.on_event("startup")
async def startup_event():
    """Initialize services on application startup"""
    configure_startup_logging()
    run_startup_checks()
    recompute_timers_on_startup()


@app.get("/")
def read_root():
    return {"message": "Kaskroutek backend is running"}


@app.get("/health")
def health_check():
    return {"status": "healthy", "environment": settings.environment}
