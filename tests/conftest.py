"""Shared fixtures: fake transports and fast retry settings."""

from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest
from loguru import logger

from core.config import AppSettings
from core.domain.models import HttpRule


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep host env vars and .env files out of AppSettings."""
    for key in list(os.environ):
        if key.startswith("RULED_HTTP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    yield
    logger.remove()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(retry_interval_seconds=0)


@pytest.fixture
def rules() -> list[HttpRule]:
    return [
        HttpRule(
            base_url="https://api.github.com/",
            query="?access_token=abc",
            headers={"Authorization": "token abc"},
        ),
        HttpRule(
            base_url="https://api.github.com/repos/",
            query="?other=1",
            headers={"X-Other": "1"},
        ),
    ]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was handed."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def recording_transport():
    return RecordingTransport


@pytest.fixture
def failing_then():
    """Build a handler that raises ConnectError `failures` times, then answers 200."""

    def factory(failures: int, status_code: int = 200):
        state = {"calls": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            state["calls"] += 1
            if state["calls"] <= failures:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(status_code, text="ok")

        return handler

    return factory
