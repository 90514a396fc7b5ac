from __future__ import annotations

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from concertinfo.config import settings
from concertinfo.errors import NavigationTimeout, RenderError, RunCancelled

logger = logging.getLogger(__name__)

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


def check_cancelled(cancel: asyncio.Event | None, where: str) -> None:
    """Raise RunCancelled if the run's cancellation token is set."""
    if cancel is not None and cancel.is_set():
        logger.info("Run cancelled %s", where)
        raise RunCancelled(f"Run cancelled {where}")


async def render_page(
    url: str,
    *,
    timeout_ms: int | None = None,
    grace_seconds: float = 3.0,
    ready_selector: str | None = None,
    cancel: asyncio.Event | None = None,
) -> str:
    """Render a JS-heavy listing page and return its HTML.

    Waits for network idle within ``timeout_ms``, then (optionally) for
    ``ready_selector``, then a fixed ``grace_seconds`` so that lists loaded
    after the idle signal get populated. One browser per call, always closed.
    """
    timeout_ms = timeout_ms or settings.navigation_timeout_ms
    check_cancelled(cancel, "before navigation")

    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True, args=BROWSER_ARGS)
        except PlaywrightError as e:
            raise RenderError(f"Could not launch browser: {e}") from e
        try:
            page = await browser.new_page(
                viewport={"width": settings.viewport_width, "height": settings.viewport_height},
                user_agent=settings.user_agent,
            )
            logger.info("Navigating to %s", url)
            try:
                response = await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            except PlaywrightTimeoutError as e:
                raise NavigationTimeout(url, f"not settled within {timeout_ms}ms") from e
            except PlaywrightError as e:
                raise NavigationTimeout(url, str(e)) from e

            if response is None:
                raise NavigationTimeout(url, "no response")
            if not response.ok:
                raise NavigationTimeout(url, f"HTTP {response.status}")
            if response.request.redirected_from is not None:
                raise NavigationTimeout(url, f"redirected to {response.url}")
            check_cancelled(cancel, "after navigation")

            if ready_selector:
                try:
                    await page.wait_for_selector(ready_selector, timeout=settings.ready_timeout_ms)
                except PlaywrightTimeoutError:
                    logger.warning("Event list not found with %r on %s", ready_selector, url)

            if grace_seconds:
                await asyncio.sleep(grace_seconds)
            check_cancelled(cancel, "after settle delay")

            html = await page.content()
            logger.info("Rendered %s with Playwright (%d chars)", url, len(html))
            return html
        except PlaywrightError as e:
            raise RenderError(f"Browser session failed for {url}: {e}") from e
        finally:
            await browser.close()
