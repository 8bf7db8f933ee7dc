# backend/tests/factories/auth.py

import factory
from factory import Sequence, LazyFunction, LazyAttribute

from core.auth import get_password_hash
from modules.auth.models.admin_models import AdminUser
from .base import BaseFactory

DEFAULT_PASSWORD = "secret"


class AdminUserFactory(BaseFactory):
    """Factory for creating admin users. The password is always ``secret``."""

    class Meta:
        model = AdminUser

    username = Sequence(lambda n: f"admin{n}")
    email = LazyAttribute(lambda obj: f"{obj.username}@kaskroutek.tn")
    password_hash = LazyFunction(lambda: get_password_hash(DEFAULT_PASSWORD))
