import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError

from app.api import app_config, auth, categories, pos, settings as settings_api, shifts, staff, tables
from app.core.cache import close_redis, get_redis, init_redis
from app.core.capabilities import negotiate_capabilities
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging
from app.db.base import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_redis()
    app.state.capabilities = await negotiate_capabilities(engine)
    logger.info(
        "%s %s started, capabilities: %s",
        settings.PROJECT_NAME,
        settings.VERSION,
        sorted(app.state.capabilities) or "none",
    )
    yield
    await close_redis()
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Restaurant point-of-sale backend: tables, POS orders, shifts and settings",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(auth.router)
app.include_router(app_config.router)
app.include_router(categories.router)
app.include_router(pos.router)
app.include_router(tables.router)
app.include_router(staff.router)
app.include_router(shifts.router)
app.include_router(settings_api.router)


@app.get("/health")
async def health_check():
    redis_state = "disabled"
    client = get_redis()
    if client is not None:
        try:
            await client.ping()
            redis_state = "ok"
        except RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            redis_state = "unavailable"
    return {"status": "ok", "version": settings.VERSION, "redis": redis_state}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
