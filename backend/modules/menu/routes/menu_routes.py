# backend/modules/menu/routes/menu_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import get_current_admin
from core.database import get_db
from core.error_handling import handle_api_errors
from modules.auth.models.admin_models import AdminUser

from ..models.menu_models import ToppingCategory
from ..schemas.menu_schemas import (
    BreadCreate, BreadUpdate, BreadOut,
    ToppingCreate, ToppingUpdate, ToppingOut,
)
from ..services.menu_service import MenuService


router = APIRouter(prefix="/api/menu", tags=["Menu"])


def get_menu_service(db: Session = Depends(get_db)) -> MenuService:
    """Dependency to get menu service instance"""
    return MenuService(db)


# ========== Breads ==========

@router.get("/breads", response_model=List[BreadOut])
async def list_breads(menu_service: MenuService = Depends(get_menu_service)):
    """List all breads ordered by name"""
    return menu_service.list_breads()


@router.post("/breads", response_model=BreadOut, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_bread(
    bread_data: BreadCreate,
    menu_service: MenuService = Depends(get_menu_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return menu_service.create_bread(bread_data)


@router.patch("/breads/{bread_id}", response_model=BreadOut)
@handle_api_errors
async def update_bread(
    bread_id: int,
    bread_data: BreadUpdate,
    menu_service: MenuService = Depends(get_menu_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return menu_service.update_bread(bread_id, bread_data)


@router.delete("/breads/{bread_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_bread(
    bread_id: int,
    menu_service: MenuService = Depends(get_menu_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    menu_service.delete_bread(bread_id)


# ========== Toppings ==========

@router.get("/toppings", response_model=List[ToppingOut])
async def list_toppings(
    category: Optional[ToppingCategory] = Query(None, description="Filter by topping category"),
    menu_service: MenuService = Depends(get_menu_service),
):
    """List toppings ordered by name, optionally for one category"""
    return menu_service.list_toppings(category)


@router.post("/toppings", response_model=ToppingOut, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_topping(
    topping_data: ToppingCreate,
    menu_service: MenuService = Depends(get_menu_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return menu_service.create_topping(topping_data)


@router.patch("/toppings/{topping_id}", response_model=ToppingOut)
@handle_api_errors
async def update_topping(
    topping_id: int,
    topping_data: ToppingUpdate,
    menu_service: MenuService = Depends(get_menu_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return menu_service.update_topping(topping_id, topping_data)


@router.delete("/toppings/{topping_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_topping(
    topping_id: int,
    menu_service: MenuService = Depends(get_menu_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    menu_service.delete_topping(topping_id)
