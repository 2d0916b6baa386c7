import os
import tempfile
from pathlib import Path

import pytest

# Настройки читаются при импорте core.config, поэтому окружение задаём до импортов приложения
_DB_DIR = tempfile.mkdtemp(prefix="classifieds-tests-")
DB_PATH = Path(_DB_DIR) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["STATIC_DIR"] = str(Path(_DB_DIR) / "public")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402

from models.base import Base  # noqa: E402
import models.user  # noqa: E402,F401
import models.ad  # noqa: E402,F401


@pytest.fixture(scope="session")
def sync_engine():
    engine = create_engine(f"sqlite:///{DB_PATH}")

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def clean_db(sync_engine):
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
