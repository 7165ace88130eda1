"""YAML menu provider, used to seed the menu store."""
import yaml
from pathlib import Path
from typing import List, Optional
from food_ordering.services.menu.base import MenuItem, MenuProvider


class YamlMenuProvider(MenuProvider):
    """Menu provider reading items from a YAML file."""

    def __init__(self, menu_file: str):
        self.menu_file = Path(menu_file)
        self._items: Optional[List[MenuItem]] = None

    async def _load_menu(self) -> List[MenuItem]:
        """Load menu from YAML file."""
        if self._items is None:
            if not self.menu_file.exists():
                self._items = []
            else:
                with open(self.menu_file, "r") as f:
                    data = yaml.safe_load(f) or {}
                self._items = [MenuItem(**item) for item in data.get("items", [])]
        return self._items

    async def get_menu(self) -> List[MenuItem]:
        """Get the full menu."""
        return await self._load_menu()

    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by id."""
        for item in await self._load_menu():
            if item.id == item_id:
                return item
        return None
