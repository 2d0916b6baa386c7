from typing import Optional, List, Union
from datetime import datetime

from pydantic import BaseModel, Field


class AdCreate(BaseModel):
    """
    Тело POST /api/ads от мини-приложения.
    Все поля необязательны на уровне схемы: обязательность и порядок
    проверок задаёт роутер, чтобы первой срабатывала ошибка по полям объявления.
    """
    title: Optional[str] = Field(None, description="Заголовок")
    description: Optional[str] = Field(None, description="Описание")
    price: Optional[Union[float, str]] = Field(None, description="Цена: число или строка с числом")
    category: Optional[str] = Field(None, description="Категория")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Ссылка на картинку")
    author_telegram_id: Optional[Union[str, int]] = Field(
        None, alias="authorTelegramId", description="Telegram ID автора из initDataUnsafe"
    )

    class Config:
        validate_by_name = True


class AuthorRead(BaseModel):
    first_name: str = Field("User", alias="firstName")
    last_name: str = Field("", alias="lastName")
    is_shop: bool = Field(False, alias="isShop")

    class Config:
        from_attributes = True
        validate_by_name = True


class AdRead(BaseModel):
    id: int
    title: str
    description: str
    price: Optional[float] = None
    category: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    is_active: bool = Field(True, alias="isActive")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    author: AuthorRead

    class Config:
        from_attributes = True
        validate_by_name = True


class AdListResponse(BaseModel):
    ads: List[AdRead]
    total: int
