from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    DATABASE_URL: str
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    DB_SSL: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    STATIC_DIR: str = "public"
    CORS_ORIGINS: str = "*"

    @property
    def async_database_url(self) -> str:
        """Railway/Heroku отдают postgres://, asyncpg нужен явный драйвер."""
        url = self.DATABASE_URL
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix):]
        return url

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Создаём глобальный объект, который будем импортировать везде
settings = Settings()
