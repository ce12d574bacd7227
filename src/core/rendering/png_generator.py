"""
PNG Generator
=============

Playwright-based PNG screenshot generation from HTML content.
Manages browser instances and viewport configuration.
"""

from typing import Optional, Dict, Any, List, AsyncGenerator
import asyncio
from contextlib import asynccontextmanager

from playwright.async_api import async_playwright, Browser, BrowserContext, Playwright

from src.config.logging import get_logger
from src.config.settings import get_settings, Settings

logger = get_logger(__name__)


class PNGGenerationError(Exception):
    """Exception raised when PNG generation fails."""

    pass


class BrowserPool:
    """Browser instance pool for efficient resource management."""

    def __init__(self, pool_size: int = 2, settings: Optional[Settings] = None):
        self.pool_size = pool_size
        self.browsers: List[Browser] = []
        self._semaphore = asyncio.Semaphore(pool_size)
        self._playwright: Optional[Playwright] = None
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="browser_pool")

    async def initialize(self) -> None:
        """Initialize browser pool."""
        try:
            self._playwright = await async_playwright().start()

            for _ in range(self.pool_size):
                browser = await self._playwright.chromium.launch(
                    headless=self.settings.playwright_headless,
                    args=[
                        "--no-sandbox",
                        "--disable-setuid-sandbox",
                        "--disable-dev-shm-usage",
                    ],
                )
                self.browsers.append(browser)

            self.logger.info("Browser pool initialized", pool_size=self.pool_size)
        except Exception as e:
            self.logger.error("Failed to initialize browser pool", error=str(e))
            await self.close()
            raise PNGGenerationError(f"Browser pool initialization failed: {e}") from e

    async def close(self) -> None:
        """Close all browsers in the pool."""
        browsers, self.browsers = self.browsers, []
        try:
            for browser in browsers:
                try:
                    await browser.close()
                except Exception as e:
                    self.logger.error("Failed to close browser", error=str(e))
        finally:
            if self._playwright:
                playwright, self._playwright = self._playwright, None
                await playwright.stop()

        self.logger.info("Browser pool closed")

    @property
    def initialized(self) -> bool:
        """Whether browsers have been launched and not yet closed."""
        return self._playwright is not None

    @property
    def available(self) -> int:
        """Number of idle browsers."""
        return len(self.browsers)

    @asynccontextmanager
    async def get_browser(self) -> AsyncGenerator[Browser, None]:
        """Get a browser instance from the pool."""
        async with self._semaphore:
            if not self.browsers:
                raise PNGGenerationError("Browser pool not initialized")

            browser = self.browsers.pop()
            try:
                yield browser
            finally:
                self.browsers.append(browser)


class PlaywrightPNGGenerator:
    """Playwright-based PNG renderer."""

    def __init__(self, browser_pool: BrowserPool, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(generator="playwright")
        self.browser_pool = browser_pool

    async def render(self, html: str, width: int, height: int) -> bytes:
        """
        Render HTML content to PNG bytes.

        Args:
            html: HTML content to render
            width: Viewport width in pixels
            height: Viewport height in pixels

        Returns:
            PNG image bytes

        Raises:
            PNGGenerationError: If PNG generation fails
        """
        try:
            self.logger.info(
                "Generating PNG from HTML",
                html_length=len(html),
                width=width,
                height=height,
            )

            async with self.browser_pool.get_browser() as browser:
                context = await self._create_browser_context(browser, width, height)

                try:
                    page = await context.new_page()
                    page.set_default_timeout(self.settings.playwright_timeout)

                    await page.set_content(html, wait_until="domcontentloaded")

                    if self.settings.wait_for_network_idle:
                        await page.wait_for_load_state("networkidle")

                    png_bytes = await page.screenshot(
                        type="png",
                        clip={"x": 0, "y": 0, "width": width, "height": height},
                    )

                    self.logger.info("PNG generation completed", file_size=len(png_bytes))
                    return png_bytes

                finally:
                    await context.close()

        except PNGGenerationError:
            raise
        except Exception as e:
            error_msg = f"PNG generation failed: {e}"
            self.logger.error("PNG generation error", error=error_msg)
            raise PNGGenerationError(error_msg) from e

    async def _create_browser_context(
        self, browser: Browser, width: int, height: int
    ) -> BrowserContext:
        """Create browser context sized to the requested viewport."""
        context_options: Dict[str, Any] = {
            "viewport": {"width": width, "height": height},
            "device_scale_factor": self.settings.device_scale_factor,
        }
        return await browser.new_context(**context_options)
