"""Webhook endpoints."""
from food_ordering.api.webhooks import calls

__all__ = ["calls"]
