from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from models.ad import Ad
from models.user import User
from schemas.ad import AdRead
from utils.ad_helpers import DEFAULT_FIRST_NAME, to_ad_read, to_author_read

PLACEHOLDER_USERNAME = "unknown"

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def list_active_ads(db: AsyncSession) -> List[AdRead]:
    """Активные объявления с данными автора, новые сверху."""
    stmt = (
        select(Ad, User.first_name, User.last_name, User.is_shop)
        .outerjoin(User, Ad.author_id == User.id)
        .where(Ad.is_active.is_(True))
        .order_by(Ad.created_at.desc(), Ad.id.desc())
    )
    result = await db.execute(stmt)
    return [
        to_ad_read(ad, to_author_read(first_name, last_name, is_shop))
        for ad, first_name, last_name, is_shop in result.all()
    ]


async def get_or_create_user(db: AsyncSession, telegram_id: str) -> User:
    """
    Найти пользователя по telegram_id или создать с данными-заглушками.

    Один INSERT ... ON CONFLICT DO UPDATE ... RETURNING: при одновременных
    первых объявлениях от одного telegram_id вторая вставка не падает
    на уникальном индексе, а возвращает уже существующую строку.
    """
    insert = _UPSERT_DIALECTS.get(db.bind.dialect.name)
    if insert is None:
        raise RuntimeError(f"Upsert is not supported for dialect {db.bind.dialect.name!r}")

    stmt = insert(User).values(
        telegram_id=telegram_id,
        first_name=DEFAULT_FIRST_NAME,
        username=PLACEHOLDER_USERNAME,
    )
    # no-op update, чтобы RETURNING отдал id и для существующей строки
    stmt = stmt.on_conflict_do_update(
        index_elements=[User.telegram_id],
        set_={"telegram_id": stmt.excluded.telegram_id},
    ).returning(User.id)
    user_id = (await db.execute(stmt)).scalar_one()

    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one()


async def create_ad(
    db: AsyncSession,
    *,
    title: str,
    description: str,
    category: str,
    price: Optional[Decimal],
    image_url: Optional[str],
    author_telegram_id: str,
) -> AdRead:
    author = await get_or_create_user(db, author_telegram_id)

    ad = Ad(
        title=title,
        description=description,
        price=price,
        category=category,
        image_url=image_url,
        author_id=author.id,
    )
    db.add(ad)
    await db.commit()
    await db.refresh(ad)

    return to_ad_read(ad, to_author_read(author.first_name, author.last_name, author.is_shop))
