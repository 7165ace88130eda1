"""Order models."""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class OrderItem(BaseModel):
    """Line item of an order."""

    name: Optional[str] = None
    toppings: List[str] = []
    category: Optional[str] = None
    size: Optional[str] = None
    price: float = 0.0
    quantity: int = Field(default=1, ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("toppings")
    @classmethod
    def distinct_toppings(cls, toppings: List[str]) -> List[str]:
        """Toppings are a set; keep first occurrence order."""
        return list(dict.fromkeys(toppings))


class OrderRequest(BaseModel):
    """Order submitted by a client. Id and total are assigned by the server."""

    customer_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    items: Optional[List[OrderItem]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def calculate_total(items: List[OrderItem]) -> float:
    """Sum of unit price times quantity, rounded to cents."""
    return round(sum(item.price * item.quantity for item in items), 2)
