"""
Application startup validation and initialization.

This module performs startup checks and the opportunistic refresh of timer
flags so that the app reports misconfiguration before serving requests.
"""

import logging
import sys
from typing import List, Tuple

from sqlalchemy import text
import sqlalchemy as sa

from core.config import settings, DEFAULT_JWT_SECRET
from core.database import engine, SessionLocal

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    "admin_users",
    "breads",
    "toppings",
    "orders",
    "loyalty_points",
    "points_transactions",
    "shipping_timers",
    "shipping_timers_delivery",
]


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except Exception as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_environment_config(self) -> bool:
        """Validate environment configuration"""
        if settings.jwt_secret_key == DEFAULT_JWT_SECRET:
            if settings.is_production:
                self.errors.append("JWT_SECRET_KEY must be changed in production")
                return False
            self.warnings.append("Using development JWT_SECRET_KEY - change for production")

        if not settings.telegram_enabled:
            self.warnings.append(
                "TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID not set - order alerts are disabled"
            )
        return True

    def check_required_tables(self) -> bool:
        """Check if required database tables exist"""
        try:
            existing_tables = sa.inspect(engine).get_table_names()
            missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
            if missing_tables:
                self.warnings.append(
                    f"Missing database tables: {', '.join(missing_tables)}. "
                    "Run migrations with: alembic upgrade head"
                )
        except Exception as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            try:
                if not check_func():
                    all_passed = False
            except Exception as e:
                self.errors.append(f"{check_name} check failed with error: {str(e)}")
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks():
    """Run all startup validation checks"""
    logger.info("=" * 60)
    logger.info("Starting Kaskroutek Backend")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    if warnings:
        logger.warning("Startup Warnings:")
        for warning in warnings:
            logger.warning(f"  {warning}")

    if errors:
        logger.error("Startup Errors:")
        for error in errors:
            logger.error(f"  {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning("Starting in development mode despite errors")
    else:
        logger.info("All startup checks passed")

    return passed, warnings


def recompute_timers_on_startup() -> None:
    """Refresh today's slot flags once; a failure only costs a log line."""
    if not settings.recompute_timers_on_startup:
        return

    from modules.timers.services.timer_service import TimerService

    db = SessionLocal()
    try:
        changed = TimerService(db).recompute_all()
        logger.info(f"Timer flags refreshed on startup: {changed}")
    except Exception as e:
        db.rollback()
        logger.warning(f"Could not refresh timer flags on startup: {str(e)}")
    finally:
        db.close()


def configure_startup_logging():
    """Configure logging for startup"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
