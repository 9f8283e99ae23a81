# FastAPI application entry point for the Moo AI chat backend.
# The mobile app's chat screen posts each user message here; the session's
# breed/topic state lives in this process until the session is closed.

import logging
import os
import sys
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from moo_ai import config
from moo_ai.completion import build_completer
from moo_ai.orchestrator import ChatOrchestrator

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Moo AI API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

orchestrator = ChatOrchestrator(build_completer())


# ─────────────────────────────────────────
# REQUEST / RESPONSE MODELS
# ─────────────────────────────────────────

class ChatRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    message: str
    locale: Optional[str] = None

class ChatResponse(BaseModel):
    session_id: str
    response: str
    refused: bool = False

class PersonaRequest(BaseModel):
    message: str

class PersonaResponse(BaseModel):
    response: str

class SessionView(BaseModel):
    session_id: str
    current_breed: Optional[str] = None
    current_topics: List[str] = []
    locale: Optional[str] = None
    turns: int = 0


# ─────────────────────────────────────────
# ROUTES
# ─────────────────────────────────────────

@app.get("/health")
def health():
    return {"status": "ok", "message": "Moo AI is ready."}


@app.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest):
    """
    One user turn. Always answers with text: refusals and upstream failures
    come back as user-safe messages, never as a 5xx.
    """
    state = orchestrator.sessions.get(request.session_id)
    if request.locale:
        state.locale = request.locale
    result = orchestrator.handle_turn(state, request.message)
    return ChatResponse(session_id=request.session_id, response=result.reply, refused=result.refused)


@app.post("/persona", response_model=PersonaResponse)
def persona(request: PersonaRequest):
    return PersonaResponse(response=orchestrator.persona_reply(request.message))


@app.get("/sessions/{session_id}", response_model=SessionView)
def get_session(session_id: str):
    state = orchestrator.sessions.peek(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return SessionView(session_id=session_id, **state.to_dict())


@app.delete("/sessions/{session_id}", status_code=204)
def close_session(session_id: str):
    """Chat view closed: forget the session's breed and topics."""
    if orchestrator.close_session(session_id):
        logger.info("Closed session %s", session_id)
    return Response(status_code=204)


# ─────────────────────────────────────────
# RUN
# ─────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("moo_ai.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8001")), reload=True)
