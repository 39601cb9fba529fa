"""
FastAPI application for the multi-agent tutor.

Run with:
    uvicorn tutor_agents.api.main:app --reload --port 8000
"""
import asyncio
import logging
from dotenv import load_dotenv
load_dotenv()  # Load .env before other imports

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from ..config import get_settings
from ..errors import InvalidInput, SessionStoreError
from ..agents.tutor_agent import TutorAgent, build_tutor
from ..services.groq_client import get_groq_client
from ..services.supabase_client import get_supabase_client
from ..services.session_store import InMemorySessionStore, SessionStore, SupabaseSessionStore
from ..services.opik_setup import setup_opik
from ..services.logging_setup import configure_logging
from ..tools.fuzzy_matcher import FuzzyMatcher
from .models import (
    ChatRequest, ChatResponse, AgentsResponse, CreateSessionRequest,
    SessionResponse, SessionListResponse, MessageListResponse, HealthResponse,
)

logger = logging.getLogger(__name__)

# Global instances (initialized on startup)
tutor: TutorAgent = None
session_store: SessionStore = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the agents and the session store on startup."""
    global tutor, session_store

    settings = get_settings()
    configure_logging(settings.log_level)

    # Validate settings
    if not settings.groq_key_list:
        raise RuntimeError("GROQ_API_KEYS (or GROQ_API_KEY) must be set in .env")

    setup_opik(settings.opik_api_key, settings.opik_workspace)

    tutor = build_tutor(
        get_groq_client(settings),
        matcher=FuzzyMatcher(threshold=settings.match_threshold),
    )

    if settings.supabase_url and settings.supabase_key:
        session_store = SupabaseSessionStore(
            get_supabase_client(settings.supabase_url, settings.supabase_key)
        )
    else:
        logger.warning("SUPABASE_URL/SUPABASE_KEY not set, keeping sessions in memory")
        session_store = InMemorySessionStore()

    logger.info(f"Agents loaded: {', '.join(tutor.available_agents())}")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Tutor Agents",
    description="Routes student questions to Math, Physics, Chemistry, History or a general tutor",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _require_store() -> SessionStore:
    if session_store is None:
        raise HTTPException(status_code=503, detail="Session store not initialized")
    return session_store


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", message="Tutor agents are running")


@app.get("/agents", response_model=AgentsResponse)
async def list_agents():
    """List the agents the router can dispatch to."""
    if tutor is None:
        raise HTTPException(status_code=503, detail="Agents not initialized")
    return AgentsResponse(available_agents=tutor.available_agents(), status="all agents loaded")


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """
    Answer the latest user message.

    - **messages**: conversation so far, the last `user` entry is answered
    - **sessionId**: optional session to append the exchange to
    """
    if tutor is None:
        raise HTTPException(status_code=503, detail="Agents not initialized")

    history = [{"role": m.role, "content": m.content} for m in request.messages]

    try:
        result = await asyncio.to_thread(tutor.route, history)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception("Chat routing failed")
        raise HTTPException(status_code=500, detail=f"Server error: {str(e)}")

    # Store the exchange; the chat still answers if the store is down
    if request.session_id and session_store is not None:
        try:
            await asyncio.to_thread(
                _store_exchange,
                session_store,
                request.session_id,
                TutorAgent.latest_user_text(history),
                result.response_text,
                result.agent_name,
            )
        except SessionStoreError as e:
            logger.error(f"[chat] storing messages failed: {e.message}")

    return ChatResponse(**result.to_response())


def _store_exchange(store: SessionStore, session_id: str, question: str, answer: str, agent: str) -> None:
    # question and answer are written together
    store.append_messages(session_id, [
        {"role": "user", "content": question},
        {"role": "assistant", "content": answer, "agent": agent},
    ])
    store.touch(session_id)


@app.get("/sessions", response_model=SessionListResponse)
async def list_sessions():
    """List chat sessions, most recently updated first."""
    store = _require_store()
    try:
        sessions = await asyncio.to_thread(store.list_sessions)
    except SessionStoreError as e:
        logger.error(f"Sessions fetch error: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to fetch sessions")
    return SessionListResponse(sessions=sessions)


@app.post("/sessions", response_model=SessionResponse)
async def create_session(req: CreateSessionRequest):
    """Create a chat session."""
    store = _require_store()
    try:
        session = await asyncio.to_thread(store.create_session, req.title)
    except SessionStoreError as e:
        logger.error(f"Session creation error: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to create session")
    return SessionResponse(session=session)


@app.get("/sessions/{session_id}/messages", response_model=MessageListResponse)
async def list_session_messages(session_id: str):
    """Messages of one session, oldest first."""
    store = _require_store()
    try:
        messages = await asyncio.to_thread(store.list_messages, session_id)
    except SessionStoreError as e:
        logger.error(f"Messages fetch error: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to fetch messages")
    return MessageListResponse(messages=messages)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tutor_agents.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
