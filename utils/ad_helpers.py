"""Утилиты для преобразования строк БД в схемы Pydantic и разбора цены."""
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from models.ad import Ad
from schemas.ad import AdRead, AuthorRead

DEFAULT_FIRST_NAME = "User"
# ads.price — NUMERIC(10, 2)
MAX_PRICE = Decimal("100000000")


def parse_price(value: Union[float, int, str, None]) -> Optional[Decimal]:
    """
    Привести цену из запроса к Decimal.
    None и пустая строка означают «без цены»; нечисловое или
    отрицательное значение, а также не влезающее в NUMERIC(10, 2) — ValueError.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid price: {value!r}")
    if not price.is_finite() or price < 0 or price >= MAX_PRICE:
        raise ValueError(f"Invalid price: {value!r}")
    return price


def to_author_read(first_name: Optional[str], last_name: Optional[str], is_shop: Optional[bool]) -> AuthorRead:
    """Автор с запасными значениями для пустых полей профиля."""
    return AuthorRead(
        first_name=first_name or DEFAULT_FIRST_NAME,
        last_name=last_name or "",
        is_shop=bool(is_shop),
    )


def to_ad_read(ad: Ad, author: AuthorRead) -> AdRead:
    return AdRead(
        id=ad.id,
        title=ad.title,
        description=ad.description,
        price=float(ad.price) if ad.price is not None else None,
        category=ad.category,
        image_url=ad.image_url,
        is_active=ad.is_active,
        created_at=ad.created_at,
        author=author,
    )
