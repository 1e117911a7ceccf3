import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from routes.code_route import router as code_router
from routes.generation_route import router as generation_router
from routes.live_ws import router as live_router
from services.gemini.client_provider import API_KEY_ENV
from services.gemini.gemini_service import GeminiService
from services.media_store import MediaStore

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file if present

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the in-memory media store for generated videos
      - the Gemini service shared by every route
    and attach them to `app.state`.

    The API key is only checked when a capability is first used, so the
    server still starts (and reports itself unconfigured) without one.
    """
    media_store = MediaStore()
    gemini_service = GeminiService(api_key=os.getenv(API_KEY_ENV), media_store=media_store)
    if not gemini_service.configured:
        logging.warning("%s is not set; AI actions will fail until it is configured", API_KEY_ENV)

    app.state.media_store = media_store
    app.state.gemini_service = gemini_service

    try:
        yield
    finally:
        try:
            await gemini_service.aclose()
        except Exception as exc:
            # Ignore shutdown errors to avoid masking more important issues.
            logging.debug("Error while closing Gemini service: %s", exc)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(lifespan=lifespan)

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the workspace index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that reports whether a Gemini key is configured.
        """
        service = getattr(request.app.state, "gemini_service", None)
        return {"ok": True, "gemini_configured": bool(service is not None and service.configured)}

    # Register application routers
    app.include_router(code_router)
    app.include_router(generation_router)
    app.include_router(live_router)

    return app


app = create_app()
