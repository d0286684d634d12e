"""Timeout and error handling middleware tests."""

import asyncio
import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from todo_service.middleware import install_request_handling


def build_app(timeout: float, healthy: bool = True) -> FastAPI:
    app = FastAPI()
    install_request_handling(app, timeout=timeout)

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(5)
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/db")
    async def db_down():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    @app.get("/health")
    async def health():
        if not healthy:
            raise RuntimeError("db down")
        return {"status": "healthy"}

    return app


@pytest.fixture
def client_factory():
    def _create(timeout: float = 1.0, healthy: bool = True) -> AsyncClient:
        return AsyncClient(
            transport=ASGITransport(app=build_app(timeout, healthy)),
            base_url="http://test",
        )

    return _create


async def test_passes_through_normal_responses(client_factory):
    async with client_factory() as client:
        resp = await client.get("/ok")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


async def test_slow_request_times_out(client_factory):
    async with client_factory(timeout=0.05) as client:
        resp = await client.get("/slow")
    assert resp.status_code == 408
    assert resp.content == b""


async def test_unhandled_error_becomes_500(client_factory):
    async with client_factory() as client:
        resp = await client.get("/boom")
    assert resp.status_code == 500
    assert resp.text == "Unhandled internal error: kaboom"


async def test_database_error_becomes_500_json(client_factory):
    async with client_factory() as client:
        resp = await client.get("/db")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Database error"}


async def test_http_errors_are_untouched(client_factory):
    async with client_factory() as client:
        resp = await client.get("/missing")
    assert resp.status_code == 404


async def test_access_line_logged(client_factory, caplog):
    caplog.set_level(logging.INFO, logger="todo_service.middleware")
    async with client_factory() as client:
        await client.get("/ok")

    lines = [
        r.getMessage() for r in caplog.records if r.name == "todo_service.middleware"
    ]
    assert len(lines) == 1
    assert lines[0].startswith("GET /ok -> 200 in ")
    assert lines[0].endswith("ms")


async def test_healthy_health_check_not_access_logged(client_factory, caplog):
    caplog.set_level(logging.INFO, logger="todo_service.middleware")
    async with client_factory() as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert not [r for r in caplog.records if r.name == "todo_service.middleware"]


async def test_crashing_health_check_still_logged(client_factory, caplog):
    caplog.set_level(logging.INFO, logger="todo_service.middleware")
    async with client_factory(healthy=False) as client:
        resp = await client.get("/health")

    assert resp.status_code == 500
    records = [r for r in caplog.records if r.name == "todo_service.middleware"]
    errors = [r for r in records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].getMessage() == "Unhandled error on GET /health"
    assert errors[0].exc_info is not None
    assert any(r.getMessage().startswith("GET /health -> 500") for r in records)


async def test_service_app_times_out_slow_requests(
    test_client, db_session, monkeypatch
):
    from todo_service.config import settings
    from todo_service.db.session import get_db
    from todo_service.main import app

    async def slow_db():
        await asyncio.sleep(5)
        yield db_session

    monkeypatch.setattr(settings, "request_timeout_seconds", 0.05)
    app.dependency_overrides[get_db] = slow_db

    resp = await test_client.get("/todos")
    assert resp.status_code == 408
    assert resp.content == b""
