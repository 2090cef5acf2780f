import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.routes.analytics import router as analytics_router
from app.routes.canvas import router as canvas_router
from app.routes.dashboard import APP_VERSION
from app.routes.dashboard import router as dashboard_router
from app.routes.timer import router as timer_router
from app.routes.webhooks import router as webhooks_router
from app.services.timer_engine import TimerController
from app.services.timer_store import ActiveTimerStore, SessionHistoryStore

# Log configuration, once per process
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True,
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()

    application = FastAPI(
        title="Conversation Time Tracker API",
        version=APP_VERSION,
        description="Tracks how long admins spend viewing Intercom conversations.",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # State lives in process memory only; a restart starts from empty stores.
    application.state.timers = TimerController(ActiveTimerStore(), SessionHistoryStore())

    application.include_router(canvas_router)
    application.include_router(timer_router)
    application.include_router(analytics_router)
    application.include_router(webhooks_router)
    application.include_router(dashboard_router)

    if not settings.intercom_secret:
        logger.warning("INTERCOM_SECRET is not set; all webhooks will be rejected")

    return application


app = create_app()
