"""Menu repository."""
from typing import List, Optional
from food_ordering.services.menu.base import MenuItem, MenuProvider


class MenuRepository:
    """Repository for menu operations."""

    def __init__(self, provider: MenuProvider):
        self.provider = provider

    async def get_menu(self) -> List[MenuItem]:
        """Get the full menu."""
        return await self.provider.get_menu()

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get item by id."""
        return await self.provider.get_item(item_id)
