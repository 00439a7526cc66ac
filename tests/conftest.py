"""Shared pytest fixtures for InviteCraft tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from invitecraft.api.main import app, get_config, get_http_transport, get_preference_store
from invitecraft.core.config import InviteCraftConfig
from invitecraft.core.preferences import MemoryPreferenceStore


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path, monkeypatch) -> InviteCraftConfig:
    """Create a test configuration isolated from the environment.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        InviteCraftConfig instance for testing
    """
    monkeypatch.delenv("INVITECRAFT_OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("INVITECRAFT_OPENAI_PROXY_BASE", raising=False)

    return InviteCraftConfig(
        _env_file=None,
        data_dir=str(temp_dir / "data"),
        openai_api_key=None,
        openai_proxy_base="",
        request_timeout=5.0,
    )


@pytest.fixture
def memory_store() -> MemoryPreferenceStore:
    """Create an empty in-memory preference store."""
    return MemoryPreferenceStore()


@pytest.fixture
def openai_requests() -> list[httpx.Request]:
    """Requests seen by the fake OpenAI transport, in order."""
    return []


@pytest.fixture
def openai_transport(openai_requests: list[httpx.Request]) -> httpx.MockTransport:
    """Fake OpenAI that answers the responses and image endpoints.

    - ``/v1/responses`` returns wording with excess blank lines
    - ``/v1/images/generations`` returns a tiny base64 payload
    - anything else returns 404
    """

    def handler(request: httpx.Request) -> httpx.Response:
        openai_requests.append(request)
        if request.url.path == "/v1/responses":
            return httpx.Response(
                200,
                json={"output_text": "Together with their families\n\n\n\n**Asha & Ravi**\n"},
            )
        if request.url.path == "/v1/images/generations":
            return httpx.Response(200, json={"data": [{"b64_json": "aW52aXRl"}]})
        return httpx.Response(404, text="no such route")

    return httpx.MockTransport(handler)


@pytest.fixture
def test_client(
    test_config: InviteCraftConfig,
    memory_store: MemoryPreferenceStore,
    openai_transport: httpx.MockTransport,
) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with config, preferences and HTTP transport overridden.

    No request leaves the process: OpenAI calls go to ``openai_transport``.
    """
    app.dependency_overrides[get_config] = lambda: test_config
    app.dependency_overrides[get_preference_store] = lambda: memory_store
    app.dependency_overrides[get_http_transport] = lambda: openai_transport
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_wording() -> str:
    """Invitation wording with paragraphs and bold lines."""
    return (
        "With the blessings of our families,\n\n"
        "Komal & Sanampreet\n\n"
        "request the honour of your presence as they celebrate their wedding ceremony.\n\n"
        "**Sunday, 2 November 2025**\n"
        "**7:00 PM onwards**\n"
        "The Lalit Hotel, Ludhiana"
    )
