"""Order persistence service."""
import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.db.models import OrderRecord
from food_ordering.services.ordering.models import OrderRequest, calculate_total


class EmptyOrderError(ValueError):
    """Raised when an order has no items."""


class OrderPersistenceService:
    """Service for persisting order data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(self, order: OrderRequest) -> OrderRecord:
        """
        Create a new order with a generated id and server-computed total.

        Raises:
            EmptyOrderError: If the order has no items; nothing is written.
        """
        if not order.items:
            raise EmptyOrderError("Invalid order format or missing items.")

        record = OrderRecord(
            id=str(uuid.uuid4()),
            customer_name=order.customer_name,
            phone_number=order.phone_number,
            email=order.email,
            address=order.address,
            items=[item.model_dump(by_alias=True) for item in order.items],
            total_price=calculate_total(order.items),
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """Get order by id."""
        return await self.db.get(OrderRecord, order_id)
