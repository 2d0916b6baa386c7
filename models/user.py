from sqlalchemy import Column, Integer, DateTime, Boolean, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, expression

from .base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    telegram_id = Column(String(255), unique=True, nullable=False)
    username = Column(String(255), nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    is_shop = Column(Boolean, default=False, server_default=expression.false(), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    ads = relationship("Ad", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User id={self.id} telegram_id={self.telegram_id}>"
