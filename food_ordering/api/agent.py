"""Agent Q&A endpoint."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from food_ordering.core.dependencies import get_agent_client
from food_ordering.services.agent.client import AgentClient, AgentServiceError


router = APIRouter()
logger = logging.getLogger(__name__)


class TalkToAgentRequest(BaseModel):
    """Agent question."""
    input: Optional[str] = None


class TalkToAgentResponse(BaseModel):
    """Agent answer."""
    response: str


@router.post("/api/agent/talk", response_model=TalkToAgentResponse)
async def talk_to_agent(
    request: Request,
    body: TalkToAgentRequest,
    agent: AgentClient = Depends(get_agent_client),
):
    """Send one message to the agent in a throwaway session and return its reply."""
    if not body.input or not body.input.strip():
        raise HTTPException(
            status_code=400,
            detail="Please pass a valid 'input' string in the request body.",
        )

    logger.info(
        f"[AGENT] Q&A request received - Input length: {len(body.input)}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    session_id = None
    try:
        session_id = await agent.create_session()
        reply = await agent.send(session_id, body.input)
    except AgentServiceError as e:
        logger.error(f"[AGENT] Error communicating with agent: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error communicating with agent")
    finally:
        if session_id:
            await agent.delete_session(session_id)

    return TalkToAgentResponse(response=reply)
