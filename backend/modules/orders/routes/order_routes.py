from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from core.auth import get_current_admin
from core.database import get_db
from core.error_handling import handle_api_errors
from core.translations import Language
from core.validators import validate_phone_number
from modules.auth.models.admin_models import AdminUser
from modules.notifications.services.telegram_service import (
    TelegramNotificationService,
    get_notification_service,
)
from ..enums.order_enums import OrderStatus
from ..schemas.order_schemas import (
    CheckoutRequest, CheckoutResponse, OrderOut, OrderStatusUpdate
)
from ..services.checkout_service import CheckoutService
from ..services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_checkout_service(db: Session = Depends(get_db)) -> CheckoutService:
    return CheckoutService(db)


@router.post("/checkout", response_model=CheckoutResponse,
             status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def checkout(
    checkout_request: CheckoutRequest,
    background_tasks: BackgroundTasks,
    checkout_service: CheckoutService = Depends(get_checkout_service),
    notification_service: TelegramNotificationService = Depends(
        get_notification_service
    ),
):
    """
    Place the orders of a cart.

    - Each cart line with **quantity** N creates N orders
    - With **payment_method** = points the cart total is redeemed once;
      409 when the balance is too low
    - The shop is alerted in the background once the orders are stored
    """
    result = checkout_service.checkout(checkout_request)
    notifications = checkout_service.build_notifications(checkout_request, result)
    background_tasks.add_task(
        notification_service.send_order_notifications, notifications
    )
    return CheckoutResponse(
        orders=[OrderOut.from_order(o, checkout_request.language) for o in result.orders],
        total_price=result.total_price,
        points_balance=result.points_balance,
    )


@router.get("", response_model=List[OrderOut])
@handle_api_errors
async def get_orders(
    status: Optional[OrderStatus] = Query(
        None, description="Filter by order status"
    ),
    lang: Optional[Language] = Query(
        None, description="Include a localized status label"
    ),
    limit: int = Query(
        100, ge=1, le=1000, description="Number of orders to return"
    ),
    offset: int = Query(0, ge=0, description="Number of orders to skip"),
    order_service: OrderService = Depends(get_order_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Retrieve orders, newest first.

    - **status**: Filter by order status (awaiting_confirmation, confirmed, etc.)
    - **lang**: en or fr
    """
    orders = order_service.list_orders(status=status, limit=limit, offset=offset)
    return [OrderOut.from_order(o, lang) for o in orders]


@router.get("/by-phone/{phone_number}", response_model=List[OrderOut])
@handle_api_errors
async def get_orders_by_phone(
    phone_number: str,
    lang: Optional[Language] = Query(None),
    order_service: OrderService = Depends(get_order_service),
):
    """Orders placed with a phone number, newest first."""
    orders = order_service.list_orders_by_phone(validate_phone_number(phone_number))
    return [OrderOut.from_order(o, lang) for o in orders]


@router.get("/{order_id}", response_model=OrderOut)
@handle_api_errors
async def get_order(
    order_id: int,
    lang: Optional[Language] = Query(None),
    order_service: OrderService = Depends(get_order_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return OrderOut.from_order(order_service.get_order(order_id), lang)


@router.put("/{order_id}/status", response_model=OrderOut)
@handle_api_errors
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    lang: Optional[Language] = Query(None),
    order_service: OrderService = Depends(get_order_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """
    Move an order to any status. Delivering a cash order for the first
    time credits the customer with loyalty points.
    """
    order = order_service.transition_order_status(order_id, status_update.status)
    return OrderOut.from_order(order, lang)


@router.post("/{order_id}/cancel", response_model=OrderOut)
@handle_api_errors
async def cancel_order(
    order_id: int,
    lang: Optional[Language] = Query(None),
    order_service: OrderService = Depends(get_order_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return OrderOut.from_order(order_service.cancel_order(order_id), lang)


@router.post("/{order_id}/uncancel", response_model=OrderOut)
@handle_api_errors
async def uncancel_order(
    order_id: int,
    lang: Optional[Language] = Query(None),
    order_service: OrderService = Depends(get_order_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Restore a cancelled order as confirmed."""
    return OrderOut.from_order(order_service.uncancel_order(order_id), lang)
