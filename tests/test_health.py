from fastapi.testclient import TestClient

from task_service.dependencies import get_task_service
from task_service.exceptions import StorageFault
from task_service.main import create_app


def test_root(client: TestClient) -> None:
    body = client.get("/").json()

    assert body["service"] == "Task Service API"
    assert body["status"] == "running"
    assert "timestamp" in body


def test_liveness(client: TestClient) -> None:
    response = client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "UP"}


def test_readiness(client: TestClient) -> None:
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "UP"}


class UnreachableStorage:
    async def check_storage(self) -> None:
        raise StorageFault("Storage failure during ping")


def test_readiness_reports_down(app, client: TestClient) -> None:
    app.dependency_overrides[get_task_service] = lambda: UnreachableStorage()

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "DOWN"}


def test_info(client: TestClient) -> None:
    body = client.get("/info").json()

    assert body["service"] == "Task Service API"
    assert body["version"] == "1.0.0"
    assert "startedAt" in body
    assert body["uptime"] >= 0


def test_openapi_document(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    assert schema["info"]["title"] == "Task Service API"
    assert "/api/tasks" in schema["paths"]
    assert "/api/tasks/{task_id}/status" in schema["paths"]
    assert "/health/ready" in schema["paths"]


def test_cors_preflight(client: TestClient) -> None:
    response = client.options(
        "/api/tasks",
        headers={
            "Origin": "http://frontend.test",
            "Access-Control-Request-Method": "PATCH",
        },
    )

    assert response.status_code == 200
    assert "PATCH" in response.headers["access-control-allow-methods"]


def test_readiness_down_when_database_unreachable(unreachable_settings) -> None:
    with TestClient(create_app(unreachable_settings)) as client:
        response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "DOWN"}
