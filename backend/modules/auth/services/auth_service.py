"""Admin authentication against the admin_users table."""

import logging

from sqlalchemy.orm import Session

from core.auth import verify_password
from core.error_handling import AuthenticationError
from ..models.admin_models import AdminUser

logger = logging.getLogger(__name__)


class AdminAuthService:
    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, username: str, password: str) -> AdminUser:
        """
        Return the admin for valid credentials.

        Unknown usernames and wrong passwords raise the same
        AuthenticationError so callers cannot probe which accounts exist.
        """
        if not username or not password:
            raise ValueError("Username and password are required")

        admin = self.db.query(AdminUser).filter(AdminUser.username == username).first()
        if admin is None or not verify_password(password, admin.password_hash):
            logger.info("Failed admin login attempt")
            raise AuthenticationError()

        logger.info(f"Admin {admin.id} logged in")
        return admin
