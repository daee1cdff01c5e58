"""FastAPI application for the Cartoon Generator."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_JSON, LOG_LEVEL
from .logging import configure_logging
from .routes import generation, sessions
from .services.session_store import session_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    configure_logging(json_format=LOG_JSON, level=LOG_LEVEL)
    logger.info("Cartoon Generator API started")

    yield

    logger.info(f"Shutting down with {len(session_store)} open sessions")


app = FastAPI(
    title="Cartoon Generator API",
    description="""
Turn a photo and an event into a six-panel comic strip.

## Workflow
1. POST `/sessions` to start a wizard session
2. POST `/sessions/{id}/photo`, then `/sessions/{id}/character` to describe the character
3. Review/edit, then approve the character
4. POST `/sessions/{id}/story` with the event, review/edit the story
5. POST `/sessions/{id}/prompts`, review/edit the panel prompts
6. POST `/sessions/{id}/images`, then GET `/sessions/{id}/export.pdf`

The stateless `/upload-image`, `/generate-prompt` and `/generate-image`
endpoints run single steps without a session.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(generation.router, tags=["Generation"])
app.include_router(sessions.router, prefix="/sessions", tags=["Wizard"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
