"""Order API endpoints."""
import json
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Request, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from food_ordering.core.dependencies import get_order_service
from food_ordering.services.ordering.models import OrderItem, OrderRequest
from food_ordering.services.persistence.orders import EmptyOrderError, OrderPersistenceService


router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_ORDER_DETAIL = "Invalid order format or missing items."


class OrderSavedResponse(BaseModel):
    """Order saved response model."""
    message: str
    order_id: str
    total_price: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OrderResponse(BaseModel):
    """Stored order response model."""
    id: str
    customer_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    items: List[OrderItem] = []
    total_price: float
    created_at: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


@router.post("/api/orders", response_model=OrderSavedResponse, response_model_by_alias=True)
async def save_order(
    request: Request,
    order_service: OrderPersistenceService = Depends(get_order_service),
):
    """
    Save an order. The id and total price are assigned by the server.

    Malformed bodies and orders without items both get a 400.
    """
    try:
        order = OrderRequest.model_validate(await request.json())
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        logger.warning(
            f"[ORDERS] Rejected order body - Error: {type(e).__name__}, "
            f"Client: {request.client.host if request.client else 'unknown'}"
        )
        raise HTTPException(status_code=400, detail=INVALID_ORDER_DETAIL)

    logger.info(
        f"[ORDERS] Save request received - {len(order.items or [])} items, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        record = await order_service.create_order(order)
    except EmptyOrderError as e:
        logger.warning(f"[ORDERS] Rejected order: {str(e)}")
        raise HTTPException(status_code=400, detail=INVALID_ORDER_DETAIL)
    except SQLAlchemyError as e:
        logger.error(
            f"[ORDERS] Error saving order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Error saving order")

    logger.info(f"[ORDERS] Order saved - OrderId: {record.id}, Total: {record.total_price:.2f}")
    return OrderSavedResponse(
        message="Order saved successfully",
        order_id=record.id,
        total_price=record.total_price,
    )


@router.get("/api/orders/{order_id}", response_model=OrderResponse, response_model_by_alias=True)
async def get_order(
    order_id: str,
    order_service: OrderPersistenceService = Depends(get_order_service),
):
    """Get a stored order."""
    try:
        record = await order_service.get_order(order_id)
    except SQLAlchemyError as e:
        logger.error(
            f"[ORDERS] Error fetching order {order_id} - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Error fetching order")

    if record is None:
        raise HTTPException(status_code=404, detail=f"Order '{order_id}' not found")

    return OrderResponse(
        id=record.id,
        customer_name=record.customer_name,
        phone_number=record.phone_number,
        email=record.email,
        address=record.address,
        items=[OrderItem(**item) for item in record.items],
        total_price=record.total_price,
        created_at=record.created_at.isoformat() if record.created_at else "",
    )
