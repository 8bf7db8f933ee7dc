from .admin_models import AdminUser

__all__ = ["AdminUser"]
