"""Database-backed menu provider."""
import logging
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.db.models import MenuItemRecord
from food_ordering.services.menu.base import MenuItem, MenuProvider, Prices

logger = logging.getLogger(__name__)


def _to_menu_item(record: MenuItemRecord) -> MenuItem:
    return MenuItem(
        id=record.id,
        name=record.name,
        description=record.description,
        prices=Prices(
            small=record.price_small,
            medium=record.price_medium,
            large=record.price_large,
        ),
        toppings=list(record.toppings or []),
        category=record.category,
    )


class DatabaseMenuProvider(MenuProvider):
    """Menu provider reading from the menu_items table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_menu(self) -> List[MenuItem]:
        """Get the full menu."""
        result = await self.db.execute(select(MenuItemRecord).order_by(MenuItemRecord.name))
        return [_to_menu_item(record) for record in result.scalars().all()]

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by id."""
        record = await self.db.get(MenuItemRecord, item_id)
        return _to_menu_item(record) if record else None

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(MenuItemRecord.id)))
        return result.scalar() or 0

    async def add_items(self, items: List[MenuItem]) -> None:
        """Insert menu items."""
        for item in items:
            self.db.add(
                MenuItemRecord(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    price_small=item.prices.small,
                    price_medium=item.prices.medium,
                    price_large=item.prices.large,
                    toppings=item.toppings,
                    category=item.category,
                )
            )
        await self.db.commit()


async def seed_menu(db: AsyncSession, source: MenuProvider) -> int:
    """
    Seed the menu table from another provider when it is empty.

    Returns:
        Number of items inserted
    """
    store = DatabaseMenuProvider(db)
    if await store.count() > 0:
        logger.info("[MENU SEED] Menu already populated, skipping seed")
        return 0

    items = await source.get_menu()
    if items:
        await store.add_items(items)
    logger.info(f"[MENU SEED] Seeded {len(items)} menu items")
    return len(items)
