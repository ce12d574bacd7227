"""
Integration Tests for Application Lifespan
==========================================

Tests that startup wires the browser pool and generator into app state and
that shutdown releases them.
"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.core.rendering.png_generator import PlaywrightPNGGenerator, PNGGenerationError


@pytest.fixture
def mock_pool_class():
    with patch("src.api.main.BrowserPool") as pool_class:
        pool = pool_class.return_value
        pool.initialize = AsyncMock()
        pool.close = AsyncMock()
        yield pool_class


def test_startup_creates_generator(test_settings, mock_pool_class):
    app = create_app(test_settings)

    with TestClient(app):
        pool = mock_pool_class.return_value
        mock_pool_class.assert_called_once_with(test_settings.browser_pool_size, settings=test_settings)
        pool.initialize.assert_awaited_once()
        assert app.state.browser_pool is pool
        assert isinstance(app.state.png_generator, PlaywrightPNGGenerator)
        assert app.state.png_generator.browser_pool is pool

    pool.close.assert_awaited_once()
    assert app.state.png_generator is None
    assert app.state.browser_pool is None


def test_startup_fails_when_pool_cannot_start(test_settings, mock_pool_class):
    mock_pool_class.return_value.initialize.side_effect = PNGGenerationError(
        "Browser pool initialization failed: no chromium"
    )
    app = create_app(test_settings)

    with pytest.raises(RuntimeError, match="Browser pool initialization failed"):
        with TestClient(app):
            pass
