import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from schemas.ad import AdCreate, AdListResponse, AdRead
from services.ads import create_ad, list_active_ads
from utils.ad_helpers import parse_price

router = APIRouter(prefix="/api", tags=["Ads"])
logger = logging.getLogger("uvicorn.error")


@router.get(
    "/ads",
    response_model=AdListResponse,
    summary="Все активные объявления, новые сверху",
)
async def get_ads(db: AsyncSession = Depends(get_db)) -> AdListResponse:
    try:
        ads = await list_active_ads(db)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error fetching ads: %s", exc)
        raise HTTPException(status_code=500, detail="Ошибка при загрузке объявлений") from exc

    return AdListResponse(ads=ads, total=len(ads))


@router.post(
    "/ads",
    response_model=AdRead,
    status_code=status.HTTP_201_CREATED,
    summary="Создать объявление от имени пользователя Telegram",
)
async def post_ad(payload: AdCreate, db: AsyncSession = Depends(get_db)) -> AdRead:
    # 1) Обязательные поля объявления
    title = (payload.title or "").strip()
    description = (payload.description or "").strip()
    category = (payload.category or "").strip()
    if not title or not description or not category:
        raise HTTPException(
            status_code=400,
            detail="Заполните обязательные поля: заголовок, описание и категория",
        )

    # 2) Telegram ID автора; подлинность не проверяется, доверяем клиенту
    author_telegram_id = str(payload.author_telegram_id or "").strip()
    if not author_telegram_id:
        raise HTTPException(
            status_code=400,
            detail="Не удалось определить пользователя. Пожалуйста, перезапустите приложение.",
        )

    # 3) Цена
    try:
        price = parse_price(payload.price)
    except ValueError:
        raise HTTPException(status_code=400, detail="Некорректная цена")

    try:
        return await create_ad(
            db,
            title=title,
            description=description,
            category=category,
            price=price,
            image_url=payload.image_url or None,
            author_telegram_id=author_telegram_id,
        )
    except Exception as exc:  # noqa: BLE001
        await db.rollback()
        logger.exception("Error creating ad: %s", exc)
        raise HTTPException(status_code=500, detail="Ошибка при создании объявления") from exc
