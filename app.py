import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend import RoomRegistry
from constants import CORS_ALLOW_ORIGINS, LOG_FILE, LOG_LEVEL, OUTBOUND_QUEUE_SIZE, PROFANITY_FILTER_ENABLED, STATIC_DIR
from logging_config import get_logger, setup_logging
from routers.rooms import rooms_router, ws_router
from routers.services import services_router
from schemas.rooms import HealthResponse
from services.broadcaster import Broadcaster
from services.gateway import ConnectionGateway
from services.ledger import WordLedger
from services.membership import MembershipManager
from services.profanity import ProfanityChecker
from services.topics import TopicSuggester

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


def create_app(
    registry: Optional[RoomRegistry] = None,
    profanity_checker: Optional[ProfanityChecker] = None,
    topic_suggester: Optional[TopicSuggester] = None,
    profanity_filter_enabled: bool = PROFANITY_FILTER_ENABLED,
    static_dir: Optional[str] = STATIC_DIR,
    outbound_queue_size: int = OUTBOUND_QUEUE_SIZE,
) -> FastAPI:
    """Build the application with its own room registry.

    Each call returns an app with independent state, so tests can spin up
    isolated servers side by side.
    """
    app = FastAPI(title="Word Pulse")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if registry is None:
        registry = RoomRegistry()
    if profanity_checker is None:
        profanity_checker = ProfanityChecker()
    if topic_suggester is None:
        topic_suggester = TopicSuggester()

    broadcaster = Broadcaster()
    membership = MembershipManager(registry, broadcaster)
    ledger = WordLedger(registry, broadcaster)

    app.state.registry = registry
    app.state.membership = membership
    app.state.ledger = ledger
    app.state.profanity_checker = profanity_checker
    app.state.topic_suggester = topic_suggester
    app.state.outbound_queue_size = outbound_queue_size
    app.state.gateway = ConnectionGateway(
        membership,
        ledger,
        profanity_checker=profanity_checker if profanity_filter_enabled else None,
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok", rooms=len(app.state.registry))

    app.include_router(ws_router)
    app.include_router(rooms_router)
    app.include_router(services_router)

    # Mounted last so the API and WebSocket routes take precedence over "/"
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving static assets from {static_dir}")
    else:
        logger.debug(f"Static directory {static_dir} not found, skipping static mount")

    logger.info(f"FastAPI application initialized (profanity filter {'on' if profanity_filter_enabled else 'off'})")
    return app


app = create_app()
