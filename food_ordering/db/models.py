"""Database models."""
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Float, Text, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class MenuItemRecord(Base):
    """Menu item document."""

    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price_small = Column(Float, default=0.0, nullable=False)
    price_medium = Column(Float, default=0.0, nullable=False)
    price_large = Column(Float, default=0.0, nullable=False)
    toppings = Column(JSON, nullable=True)  # List of topping names
    category = Column(String, nullable=True)


class OrderRecord(Base):
    """Order document, partitioned by its own id."""

    __tablename__ = "orders"

    id = Column(String, primary_key=True, index=True)
    customer_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    items = Column(JSON, nullable=False)  # List of order item dicts
    total_price = Column(Float, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
