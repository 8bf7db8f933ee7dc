# backend/modules/menu/models/__init__.py

from .menu_models import Bread, Topping, ToppingCategory

__all__ = ["Bread", "Topping", "ToppingCategory"]
