# backend/modules/menu/models/menu_models.py

"""
Catalog models: breads and toppings a sandwich is built from.
"""

from enum import Enum

from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from core.database import Base
from core.mixins import TimestampMixin
from ..utils.names import parse_bilingual_name


class ToppingCategory(str, Enum):
    SALADS = "salads"
    MEATS = "meats"
    CONDIMENTS = "condiments"
    EXTRA = "extra"


class BilingualNameMixin:
    """Exposes the two halves of a ``"<English>, <French>"`` name"""

    @property
    def name_en(self) -> str:
        return parse_bilingual_name(self.name)[0]

    @property
    def name_fr(self) -> str:
        return parse_bilingual_name(self.name)[1]


class Bread(Base, TimestampMixin, BilingualNameMixin):
    __tablename__ = "breads"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    price = Column(Numeric(10, 3), nullable=False)
    image_url = Column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="bread_price_non_negative"),
    )

    def __repr__(self):
        return f"<Bread(id={self.id}, name='{self.name}', price={self.price})>"


class Topping(Base, TimestampMixin, BilingualNameMixin):
    __tablename__ = "toppings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    price = Column(Numeric(10, 3), nullable=False)
    image_url = Column(String(500), nullable=True)
    category = Column(String(20), nullable=False, default=ToppingCategory.EXTRA.value, index=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="topping_price_non_negative"),
    )

    def __repr__(self):
        return f"<Topping(id={self.id}, name='{self.name}', category='{self.category}')>"
