# backend/modules/menu/schemas/menu_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ..models.menu_models import ToppingCategory
from ..utils.names import create_bilingual_name


class BilingualNameInput(BaseModel):
    """Accepts either the stored ``name`` or separate English/French names"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    name_en: Optional[str] = Field(None, min_length=1, max_length=100)
    name_fr: Optional[str] = Field(None, min_length=1, max_length=100)

    @model_validator(mode="after")
    def combine_names(self):
        if self.name_en and self.name_fr:
            self.name = create_bilingual_name(self.name_en, self.name_fr)
        elif self.name_en or self.name_fr:
            raise ValueError("name_en and name_fr must be provided together")
        return self


class BreadCreate(BilingualNameInput):
    price: Decimal = Field(..., ge=0)
    image_url: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def require_name(self):
        if not self.name:
            raise ValueError("name or name_en/name_fr is required")
        return self


class BreadUpdate(BilingualNameInput):
    price: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)


class BreadOut(BaseModel):
    id: int
    name: str
    name_en: str
    name_fr: str
    price: Decimal
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ToppingCreate(BreadCreate):
    category: ToppingCategory = ToppingCategory.EXTRA


class ToppingUpdate(BreadUpdate):
    category: Optional[ToppingCategory] = None


class ToppingOut(BreadOut):
    category: ToppingCategory
