from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging
from .core.redis_client import redis_manager
from .services.chat.delivery import RedisRelay
from .services.chat.websocket_manager import websocket_manager

from .routers import health, profiles, mentors, auth
from .routers.chat import chat_rooms_router, messages_router, websocket_router

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Mentor Chat API")

    relay = None
    if redis_manager.enabled:
        relay = RedisRelay(redis_manager, websocket_manager)
        await relay.start()
    else:
        logger.info("REDIS_URL not set, chat notifications stay in this process")

    yield

    logger.info("Shutting down Mentor Chat API")
    if relay:
        await relay.stop()
    await redis_manager.disconnect()
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="Mentor Chat API",
    description="Anonymous addiction-recovery mentorship: mentor directory and mentor/patient chat",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profiles.router)
app.include_router(mentors.router)
app.include_router(chat_rooms_router)
app.include_router(messages_router)
app.include_router(websocket_router)

@app.get("/")
async def root():
    return {
        "message": "Mentor Chat API",
        "version": settings.app_version,
        "features": ["Mentor directory", "Anonymous profiles", "Real-time chat"],
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mentor_chat.main:app", host="0.0.0.0", port=8000, reload=True)
