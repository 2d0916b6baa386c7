import logging
import time
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.database import engine, init_models

from routers.health import router as health_router
from routers.ads import router as ads_router

logging.basicConfig(
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
)

app = FastAPI(
    title="Classifieds MiniApp Backend",
    version="0.1.0",
    description="Backend для Telegram Mini-App с объявлениями"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger = logging.getLogger("uvicorn.error")

static_dir = Path(settings.STATIC_DIR)


@app.middleware("http")
async def log_request_time(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = (time.perf_counter() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} completed in {process_time:.2f} ms"
    )
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # фронтенд читает текст ошибки из поля error
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Request validation failed: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Некорректные данные запроса"})


app.include_router(health_router)
app.include_router(ads_router)


@app.on_event("startup")
async def on_startup():
    # Без таблиц API работать не может: ошибка здесь останавливает процесс
    try:
        await init_models()
    except Exception as exc:
        logger.critical("Ошибка создания таблиц: %s", exc)
        raise
    logger.info("Сервер готов принимать запросы на порту %s", settings.PORT)


@app.get("/", include_in_schema=False)
async def root():
    index = static_dir / "index.html"
    if index.is_file():
        return FileResponse(index)
    return {"message": "Classifieds MiniApp Backend"}


@app.on_event("shutdown")
async def shutdown():
    # Закрываем все соединения пула
    await engine.dispose()


def mount_public(application: FastAPI, directory: Path) -> None:
    """
    Раздаёт фронтенд из корня сайта, чтобы index.html находил app.js
    и стили по относительным путям.
    """
    # монтируется последним: /api/* и / обрабатываются роутами раньше
    application.mount("/", StaticFiles(directory=directory), name="public")


if static_dir.is_dir():
    mount_public(app, static_dir)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
