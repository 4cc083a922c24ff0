import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from eventhub.config import get_settings
from eventhub.database import engine
from eventhub.middleware.error_handler import register_error_handlers
from eventhub.routers.assistances import router as assistances_router
from eventhub.routers.events import router as events_router
from eventhub.routers.friendships import router as friendships_router
from eventhub.routers.messages import router as messages_router
from eventhub.routers.users import router as users_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize Sentry
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: verify DB connection
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("eventhub ready on port %s", settings.PORT)

    yield

    await engine.dispose()


app = FastAPI(
    title="Eventhub API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(users_router)
app.include_router(events_router)
app.include_router(assistances_router)
app.include_router(friendships_router)
app.include_router(messages_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
