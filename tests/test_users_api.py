import asyncio
import json
import socket

import httpx
import pytest
from fastapi.testclient import TestClient

import sample_api.main as api_main
from sample_api.main import app, build_server, create_app
from sample_config.settings import AppConfig
from sample_logger.logging import LoggerConfig, create_logger


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def api_logger():
    return create_logger(LoggerConfig(level="info", service="api"))


def _json_lines(text):
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


def test_list_users_returns_literal_payload(client, admin_user_dict):
    res = client.get("/users")

    assert res.status_code == 200, res.text
    assert res.json() == {"data": [admin_user_dict], "status": 200}


def test_body_status_matches_http_status(client):
    res = client.get("/users")

    assert res.json()["status"] == res.status_code
    assert "message" not in res.json()


def test_query_string_is_ignored(client, admin_user_dict):
    res = client.get("/users", params={"page": 2, "role": "user"})

    assert res.json()["data"] == [admin_user_dict]


def test_no_other_user_routes(client):
    assert client.get("/users/1").status_code == 404
    assert client.post("/users", json={}).status_code == 405


def test_request_id_is_echoed_or_generated(client):
    echoed = client.get("/users", headers={"X-Request-ID": "req-123"})
    generated = client.get("/users")

    assert echoed.headers["X-Request-ID"] == "req-123"
    assert generated.headers["X-Request-ID"]


def test_access_line_carries_request_id(client, api_logger, capsys):
    client.get("/users", headers={"X-Request-ID": "req-456"})

    access = [line for line in _json_lines(capsys.readouterr().out) if line["message"] == "GET /users -> 200"]
    assert len(access) == 1
    assert access[0]["request_id"] == "req-456"
    assert access[0]["service"] == "api"
    assert access[0]["duration_ms"] >= 0


def test_cors_allows_any_origin_by_default(client):
    res = client.get("/users", headers={"Origin": "http://localhost:5173"})

    assert res.headers["access-control-allow-origin"] == "*"


def test_docs_are_disabled_in_production():
    prod_client = TestClient(create_app(AppConfig(environment="production")))

    assert prod_client.get("/docs").status_code == 404
    assert prod_client.get("/users").status_code == 200


def test_concurrent_requests_get_identical_bodies():
    async def fetch_all(n: int) -> list[httpx.Response]:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
            return await asyncio.gather(*(ac.get("/users") for _ in range(n)))

    responses = asyncio.run(fetch_all(16))

    assert {r.status_code for r in responses} == {200}
    assert len({r.content for r in responses}) == 1


def test_startup_line_names_the_port_actually_bound(api_logger, capsys):
    server = build_server(AppConfig(host="127.0.0.1", port=0))

    async def start_then_stop():
        serving = asyncio.create_task(server.serve())
        for _ in range(500):
            if server.started or serving.done():
                break
            await asyncio.sleep(0.01)
        bound = server.bound_port
        server.should_exit = True
        await serving
        return bound

    bound = asyncio.run(start_then_stop())

    started = [line for line in _json_lines(capsys.readouterr().out) if line["message"].startswith("API server started")]
    assert bound and bound > 0
    assert [line["message"] for line in started] == [f"API server started on port {bound}"]
    assert started[0]["level"] == "info"


def test_run_exits_without_startup_line_when_port_is_taken(monkeypatch, api_logger, capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
        taken.bind(("127.0.0.1", 0))
        taken.listen(1)
        port = taken.getsockname()[1]
        monkeypatch.setattr(api_main, "config", AppConfig(host="127.0.0.1", port=port))

        with pytest.raises(SystemExit) as exc_info:
            api_main.run()

    assert exc_info.value.code not in (0, None)
    assert "API server started" not in capsys.readouterr().out
