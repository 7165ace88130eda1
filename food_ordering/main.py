"""Main FastAPI application."""
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from food_ordering.core.config import settings
from food_ordering.core.dependencies import close_clients
from food_ordering.core.logging import setup_logging
from food_ordering.db.database import AsyncSessionLocal, init_db
from food_ordering.api import agent, health, menu, orders, webhooks
from food_ordering.services.menu.database_menu import seed_menu
from food_ordering.services.menu.yaml_menu import YamlMenuProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    async with AsyncSessionLocal() as db:
        await seed_menu(db, YamlMenuProvider(settings.menu_seed_file))
    yield
    # Shutdown
    await close_clients()


app = FastAPI(
    title="Food Ordering Voice Agent",
    description="Voice ordering backend for Azure Communication Services calls",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(webhooks.calls.router, prefix="/webhooks", tags=["webhooks"])
app.include_router(menu.router, tags=["menu"])
app.include_router(orders.router, tags=["orders"])
app.include_router(agent.router, tags=["agent"])


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("food_ordering.main:app", host=settings.host, port=settings.port)
