"""Optional features negotiated once at startup and stored on ``app.state.capabilities``."""

import logging

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import settings

logger = logging.getLogger(__name__)

SHIFT_LOGS = "shift_logs"


async def negotiate_capabilities(engine: AsyncEngine) -> set[str]:
    capabilities: set[str] = set()

    if not settings.ENABLE_SHIFT_LOGS:
        logger.info("Shift logging disabled by configuration")
        return capabilities

    async with engine.connect() as conn:
        has_table = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table("shift_logs"))
    if has_table:
        capabilities.add(SHIFT_LOGS)
    else:
        logger.warning("ENABLE_SHIFT_LOGS is set but table 'shift_logs' is missing; run migrations")

    return capabilities
