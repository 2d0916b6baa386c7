# routers/health.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db

router = APIRouter(prefix="/api", tags=["Health"])
logger = logging.getLogger("uvicorn.error")


@router.get("/health", summary="Health check: сервер и соединение с БД")
async def healthcheck(db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        logger.warning("Health check: база данных недоступна: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "ERROR",
                "message": "Ошибка подключения к базе данных",
            },
        )

    return {
        "status": "OK",
        "message": "Сервер и база данных работают!",
        "database": "PostgreSQL Connected",
    }
