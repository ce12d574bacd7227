"""
Test Configuration
==================

Pytest configuration with shared settings, a recording renderer and API clients.
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_png_generator
from src.api.main import create_app
from src.config.settings import Settings
from tests.utils.mocks import RecordingRenderer


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    __test__ = False

    environment: str = "testing"
    debug: bool = True
    browser_pool_size: int = 1
    playwright_headless: bool = True
    log_level: str = "DEBUG"


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture
def renderer() -> RecordingRenderer:
    """Recording renderer injected in place of the browser-backed generator."""
    return RecordingRenderer()


@pytest.fixture
def app(test_settings: TestSettings, renderer: RecordingRenderer) -> FastAPI:
    """Application with the renderer dependency overridden. Lifespan is not run."""
    application = create_app(test_settings)
    application.dependency_overrides[get_png_generator] = lambda: renderer
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    yield TestClient(app)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file paths."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
