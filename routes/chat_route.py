"""FastAPI routes for the stateless chat bots and the agent console."""

from fastapi import APIRouter, HTTPException, Request

from controllers.chat_controller import chat_reply, edubot_reply, push_agent_message
from models.guidance_payloads import AgentMessagePayload, ChatPayload, EduBotPayload

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat")
async def chat_route(request: Request, payload: ChatPayload):
    """Return a single assistant reply for the chat bot widget."""
    return await chat_reply(request, payload.message)


@router.post("/edubot/chat")
async def edubot_chat_route(request: Request, payload: EduBotPayload):
    """Return an EduBot reply plus suggested quick replies."""
    return await edubot_reply(request, payload.message, payload.context)


@router.post("/chat/sessions/{session_id}/messages")
async def agent_message_route(request: Request, session_id: str, payload: AgentMessagePayload):
    """Push an agent or system message into a live chat session."""
    try:
        return await push_agent_message(
            request, session_id, payload.message, payload.sender, payload.sender_name
        )
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
