"""Menu API endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from food_ordering.core.dependencies import get_menu_repository
from food_ordering.services.menu.base import MenuItem
from food_ordering.services.menu.repository import MenuRepository


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/menu", response_model=List[MenuItem])
async def get_menu(
    request: Request,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Get the full menu."""
    logger.info(
        f"[MENU] Request received - Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        items = await menu_repository.get_menu()
    except Exception as e:
        logger.error(
            f"[MENU] Error fetching menu - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Error fetching menu")

    logger.info(f"[MENU] Menu loaded - {len(items)} items")
    return items


@router.get("/api/menu/{item_id}", response_model=MenuItem)
async def get_menu_item(
    item_id: str,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Get a single menu item."""
    try:
        item = await menu_repository.get_item(item_id)
    except Exception as e:
        logger.error(
            f"[MENU] Error fetching menu item '{item_id}' - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Error fetching menu item")

    if item is None:
        raise HTTPException(status_code=404, detail=f"Menu item '{item_id}' not found")
    return item
