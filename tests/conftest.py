"""
Shared pytest fixtures for the Polyglot Chat test suite.

This module provides fixtures that are automatically available to all test files:
- A fake renderer that stands in for the Gemini SDK (see tests/fakes.py)
- Translation service and chat controller wired to the fake
- FastAPI TestClient instances built with ``create_app``
- Shared payloads live in tests/constants.py

No test talks to the network: the only network-facing class is
``GeminiRenderer``, and its own tests patch the SDK client.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from polyglot_chat.api.server import create_app
from polyglot_chat.chat.controller import ChatController
from polyglot_chat.config import ServerConfig
from polyglot_chat.translation.service import TranslationService
from tests.fakes import FakeRenderer

# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def service(fake_renderer: FakeRenderer) -> TranslationService:
    return TranslationService(renderer=fake_renderer)


@pytest.fixture
def controller(service: TranslationService) -> ChatController:
    return ChatController(service=service)


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture
def server_config() -> ServerConfig:
    """Default configuration, independent of any local server.ini."""
    cfg = ServerConfig()
    cfg.attachments.max_bytes = 1024
    return cfg


@pytest.fixture
def test_client(
    server_config: ServerConfig, service: TranslationService
) -> Generator[TestClient, None, None]:
    """
    TestClient for an app wired to the fake renderer.

    Yields:
        TestClient ready to issue requests
    """
    app = create_app(server_config, service=service)
    with TestClient(app) as client:
        yield client
