"""Menu provider interface."""
from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel


class Prices(BaseModel):
    """Size-tiered prices."""

    small: float = 0.0
    medium: float = 0.0
    large: float = 0.0


class MenuItem(BaseModel):
    """Menu item model."""

    id: str
    name: str
    description: Optional[str] = None
    prices: Prices = Prices()
    toppings: List[str] = []
    category: Optional[str] = None


class MenuProvider(ABC):
    """Abstract base class for menu providers."""

    @abstractmethod
    async def get_menu(self) -> List[MenuItem]:
        """Get the full menu."""
        pass

    @abstractmethod
    async def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by id."""
        pass
