import os
os.environ["APP_ENV"] = "test"

from typing import Generator

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from jsend.api.response import jsend_response
from jsend.core.config import get_settings
from jsend.envelope import Envelope
from jsend.main import create_app


class _Item(BaseModel):
    name: str
    quantity: int


class FakeCarrier:
    def __init__(self) -> None:
        self.body: str | None = None
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []

    def set_body(self, body: str) -> None:
        self.calls.append("body")
        self.body = body

    def set_header(self, name: str, value: str) -> None:
        self.calls.append(f"header:{name}")
        self.headers[name] = value


@pytest.fixture
def carrier() -> FakeCarrier:
    return FakeCarrier()


@pytest.fixture
def app() -> Generator[FastAPI, None, None]:
    get_settings.cache_clear()
    application = create_app()

    @application.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @application.get("/missing-thing")
    async def missing_thing():
        raise HTTPException(status_code=404, detail="Thing not found")

    @application.get("/teapot")
    async def teapot():
        raise HTTPException(status_code=503, detail={"retry_after": 30})

    @application.post("/items")
    async def create_item(item: _Item):
        return {"name": item.name}

    @application.get("/broken-payload")
    async def broken_payload():
        return jsend_response(Envelope.lenient({"ratio": float("nan")}).code(200))

    yield application
    get_settings.cache_clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
