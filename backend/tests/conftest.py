# backend/tests/conftest.py

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from core.auth import get_current_admin
from core.database import Base, SessionLocal, engine, get_db
from app.main import app
from modules.notifications.services.telegram_service import (
    TelegramNotificationService,
    get_notification_service,
)
from tests.factories import BaseFactory, AdminUserFactory


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database schema and session for each test."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    BaseFactory.bind_session(db)
    try:
        yield db
    finally:
        BaseFactory.reset_session()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier():
    """Notification service whose sends are recorded instead of posted."""
    service = TelegramNotificationService(bot_token="token", chat_id="chat")
    service.send_order_notifications = AsyncMock(return_value=0)
    service.send_order_notification = AsyncMock(return_value=True)
    return service


@pytest.fixture(scope="function")
def client(db_session, notifier):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db_session):
    return AdminUserFactory(username="admin")


@pytest.fixture
def admin_client(client, admin_user):
    """Test client already authenticated as an admin."""
    app.dependency_overrides[get_current_admin] = lambda: admin_user
    yield client
    app.dependency_overrides.pop(get_current_admin, None)
