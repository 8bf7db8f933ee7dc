# backend/modules/menu/services/menu_service.py

"""
Catalog management for breads and toppings.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from core.error_handling import NotFoundError
from ..models.menu_models import Bread, Topping, ToppingCategory
from ..schemas.menu_schemas import BreadCreate, BreadUpdate, ToppingCreate, ToppingUpdate

logger = logging.getLogger(__name__)

# Fields a partial update may touch; name_en/name_fr are folded into name
_UPDATABLE_FIELDS = ("name", "price", "image_url", "category")


class MenuService:
    def __init__(self, db: Session):
        self.db = db

    # ========== Breads ==========

    def list_breads(self) -> List[Bread]:
        return self.db.query(Bread).order_by(Bread.name).all()

    def get_bread(self, bread_id: int) -> Bread:
        bread = self.db.query(Bread).filter(Bread.id == bread_id).first()
        if not bread:
            raise NotFoundError("Bread", bread_id)
        return bread

    def create_bread(self, data: BreadCreate) -> Bread:
        bread = Bread(name=data.name, price=data.price, image_url=data.image_url)
        self.db.add(bread)
        self.db.commit()
        self.db.refresh(bread)
        logger.info(f"Bread {bread.id} created: {bread.name}")
        return bread

    def update_bread(self, bread_id: int, data: BreadUpdate) -> Bread:
        bread = self.get_bread(bread_id)
        self._apply_update(bread, data)
        self.db.commit()
        self.db.refresh(bread)
        return bread

    def delete_bread(self, bread_id: int) -> None:
        bread = self.get_bread(bread_id)
        self.db.delete(bread)
        self.db.commit()
        logger.info(f"Bread {bread_id} deleted")

    # ========== Toppings ==========

    def list_toppings(self, category: Optional[ToppingCategory] = None) -> List[Topping]:
        query = self.db.query(Topping)
        if category:
            query = query.filter(Topping.category == ToppingCategory(category).value)
        return query.order_by(Topping.name).all()

    def get_topping(self, topping_id: int) -> Topping:
        topping = self.db.query(Topping).filter(Topping.id == topping_id).first()
        if not topping:
            raise NotFoundError("Topping", topping_id)
        return topping

    def get_toppings_by_ids(self, topping_ids: Sequence[int]) -> List[Topping]:
        """
        Resolve toppings keeping the requested order (and duplicates).

        Raises NotFoundError for the first id that does not exist.
        """
        if not topping_ids:
            return []
        found = {
            t.id: t
            for t in self.db.query(Topping).filter(Topping.id.in_(set(topping_ids))).all()
        }
        toppings = []
        for topping_id in topping_ids:
            if topping_id not in found:
                raise NotFoundError("Topping", topping_id)
            toppings.append(found[topping_id])
        return toppings

    def create_topping(self, data: ToppingCreate) -> Topping:
        topping = Topping(
            name=data.name,
            price=data.price,
            image_url=data.image_url,
            category=ToppingCategory(data.category).value,
        )
        self.db.add(topping)
        self.db.commit()
        self.db.refresh(topping)
        logger.info(f"Topping {topping.id} created: {topping.name}")
        return topping

    def update_topping(self, topping_id: int, data: ToppingUpdate) -> Topping:
        topping = self.get_topping(topping_id)
        self._apply_update(topping, data)
        self.db.commit()
        self.db.refresh(topping)
        return topping

    def delete_topping(self, topping_id: int) -> None:
        topping = self.get_topping(topping_id)
        self.db.delete(topping)
        self.db.commit()
        logger.info(f"Topping {topping_id} deleted")

    def _apply_update(self, item, data) -> None:
        update_dict = data.model_dump(exclude_unset=True)
        if data.name is not None:
            update_dict["name"] = data.name
        for field in _UPDATABLE_FIELDS:
            if field in update_dict and update_dict[field] is not None:
                value = update_dict[field]
                if field == "category":
                    value = ToppingCategory(value).value
                setattr(item, field, value)
