"""Call event webhook endpoint."""
import json
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from food_ordering.core.dependencies import get_dispatcher
from food_ordering.services.call_session.dispatcher import CallEventDispatcher
from food_ordering.services.call_session.events import find_validation_code, parse_delivery

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/calls")
async def handle_call_events(
    request: Request,
    dispatcher: CallEventDispatcher = Depends(get_dispatcher),
):
    """
    Handle call events from Event Grid and Call Automation callbacks.

    Subscription validation deliveries are answered with their validation
    code and nothing else in them is processed. Any other structurally valid
    delivery is acknowledged once every event in it has been attempted.
    """
    try:
        body = await request.json()
        events = parse_delivery(body)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
        logger.warning(
            f"[CALL EVENTS] Rejected delivery - Error: {type(e).__name__}: {str(e)}, "
            f"Client: {request.client.host if request.client else 'unknown'}"
        )
        raise HTTPException(status_code=400, detail="Invalid request body")

    validation_code = find_validation_code(events)
    if validation_code is not None:
        if not validation_code:
            raise HTTPException(status_code=400, detail="Validation code not found in event data")
        logger.info("[CALL EVENTS] Answered subscription validation")
        return {"validationResponse": validation_code}

    logger.info(
        f"[CALL EVENTS] Received {len(events)} event(s): "
        f"{[event.raw_type for event in events]}"
    )
    await dispatcher.dispatch(events)
    return {"status": "ok"}
