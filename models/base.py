from sqlalchemy.orm import declarative_base

# Общий Base для всех моделей
Base = declarative_base()
