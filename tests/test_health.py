from sqlalchemy.exc import OperationalError

from core.database import get_db


class UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))


async def _unreachable_db():
    yield UnreachableSession()


def test_health_reports_ok_when_database_answers(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "OK",
        "message": "Сервер и база данных работают!",
        "database": "PostgreSQL Connected",
    }


def test_health_reports_error_when_database_is_down(client):
    from main import app

    app.dependency_overrides[get_db] = _unreachable_db

    response = client.get("/api/health")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "ERROR"
    assert "could not connect" not in body["message"]

    # процесс продолжает обслуживать запросы
    app.dependency_overrides.clear()
    assert client.get("/api/health").status_code == 200


def test_root_without_static_page_returns_banner(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Classifieds MiniApp Backend"}


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_public_directory_is_served_from_site_root(tmp_path):
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from main import mount_public
    from routers.health import router as health_router

    (tmp_path / "index.html").write_text('<script src="app.js"></script>', encoding="utf-8")
    (tmp_path / "app.js").write_text("loadAds();", encoding="utf-8")
    application = FastAPI()
    application.include_router(health_router)
    mount_public(application, tmp_path)

    client = TestClient(application)

    assert client.get("/app.js").text == "loadAds();"
    assert client.get("/api/health").json()["status"] == "OK"
    assert client.get("/missing.js").status_code == 404
