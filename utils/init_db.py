import asyncio
import logging
import sys

from core.database import engine, init_models

log = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


async def async_init_database():
    log.info("Creating tables if missing...")
    try:
        await init_models()
    finally:
        await engine.dispose()
    log.info("Database schema is ready.")


def init_database() -> int:
    try:
        asyncio.run(async_init_database())
    except Exception:
        log.exception("Failed to create tables")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(init_database())
