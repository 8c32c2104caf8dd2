import inspect
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file if present

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from openai import AsyncOpenAI

from routes.application_route import router as application_router
from routes.chat_route import router as chat_router
from routes.chat_ws import router as chat_ws_router
from routes.guidance_route import router as guidance_router
from services.ai.guidance_client import GuidanceClient
from services.ai.reply_generator import ReplyGenerator
from services.relay.session_relay import SessionRelay
from utils.database_init import AsyncDatabaseInitializer

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
)
LOGGER = logging.getLogger(__name__)


async def _close_openai_client(client) -> None:
    aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
    if aclose is None:
        return
    try:
        if inspect.iscoroutinefunction(aclose):
            await aclose()
        else:
            result = aclose()
            if inspect.isawaitable(result):
                await result
    except Exception:
        LOGGER.warning("Error while closing the OpenAI client", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the SQLite database (at DATABASE_DIR/app.db)
      - the OpenAI async client and the services built on it
      - the chat relay that owns the live websocket sessions
    and attach them to `app.state`.
    """
    db_initializer = AsyncDatabaseInitializer()
    await db_initializer.ensure_database()
    app.state.db_initializer = db_initializer

    openai_api_key = os.getenv("OPENAI_API_KEY")
    if not openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is not set")

    try:
        # OPENAI_BASE_URL lets the client target any OpenAI-compatible endpoint (e.g. OpenRouter).
        openai_client = AsyncOpenAI(api_key=openai_api_key, base_url=os.getenv("OPENAI_BASE_URL") or None)
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc

    app.state.openai_client = openai_client
    app.state.reply_generator = ReplyGenerator(openai_client)
    app.state.guidance_client = GuidanceClient(openai_client)
    app.state.chat_relay = SessionRelay(app.state.reply_generator.generate)
    LOGGER.info("StudyPath backend ready (database at %s)", db_initializer.db_path)

    try:
        yield
    finally:
        relay = getattr(app.state, "chat_relay", None)
        if relay is not None:
            await relay.aclose()
        client = getattr(app.state, "openai_client", None)
        if client is not None:
            await _close_openai_client(client)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(title="StudyPath AI", lifespan=lifespan)

    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check reporting database, OpenAI client and relay presence.
        """
        state = request.app.state
        relay = getattr(state, "chat_relay", None)
        return {
            "ok": True,
            "db_initialized": hasattr(state, "db_initializer"),
            "openai_available": getattr(state, "openai_client", None) is not None,
            "active_chat_sessions": len(relay.registry) if relay is not None else 0,
        }

    app.include_router(guidance_router)
    app.include_router(application_router)
    app.include_router(chat_router)
    app.include_router(chat_ws_router)

    return app


app = create_app()
