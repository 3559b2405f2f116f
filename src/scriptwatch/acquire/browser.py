"""Headless browser acquisition via Playwright.

``BrowserSource`` owns one Playwright driver and one Chromium instance for
the duration of a ``with`` block. Each page gets its own browser context,
closed as soon as the page has been inspected:

    with BrowserSource(wait_ms=5000) as source:
        scan = run_scan(urls, source)
"""

from __future__ import annotations

import logging

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Playwright,
    Response,
    sync_playwright,
)
from playwright.sync_api import Error as PlaywrightError

from scriptwatch.acquire.base import AcquisitionError
from scriptwatch.inventory.models import PageSnapshot
from scriptwatch.inventory.snapshot import (
    RawResponse,
    RawScript,
    build_page_snapshot,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

_CAPTURED_RESOURCE_TYPES = {"document", "script"}

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_BINDING_NAME = "scriptwatchInjected"

# Reports script elements added after load; the observer is disconnected
# once the wait window closes.
_OBSERVER_JS = """
() => {
  const observer = new MutationObserver((mutations) => {
    for (const mutation of mutations) {
      for (const node of mutation.addedNodes) {
        if (node.nodeType === Node.ELEMENT_NODE && node.tagName === 'SCRIPT') {
          window.%(binding)s({
            src: node.getAttribute('src'),
            outerHTML: node.outerHTML.slice(0, 500),
          });
        }
      }
    }
  });
  observer.observe(document.documentElement, {childList: true, subtree: true});
  window.__scriptwatchObserver = observer;
}
""" % {"binding": _BINDING_NAME}

_DISCONNECT_JS = """
() => {
  if (window.__scriptwatchObserver) {
    window.__scriptwatchObserver.disconnect();
  }
}
"""

_COLLECT_JS = """
() => Array.from(document.getElementsByTagName('script')).map((el) => ({
  src: el.getAttribute('src'),
  text: el.textContent || '',
}))
"""


class BrowserSource:
    """PageSource backed by headless Chromium."""

    def __init__(
        self,
        wait_ms: int = 5000,
        nav_timeout_ms: int = 60000,
        headless: bool = True,
    ) -> None:
        self._wait_ms = wait_ms
        self._nav_timeout_ms = nav_timeout_ms
        self._headless = headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    def __enter__(self) -> BrowserSource:
        self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def open(self) -> None:
        if self._browser is not None:
            return
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(
                headless=self._headless,
                args=_LAUNCH_ARGS,
            )
        except PlaywrightError:
            self._playwright.stop()
            self._playwright = None
            raise
        logger.debug("Browser launched (headless=%s)", self._headless)

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        logger.debug("Browser closed")

    def capture(self, page_url: str) -> PageSnapshot:
        """Load ``page_url`` and return its script inventory."""
        if self._browser is None:
            raise RuntimeError("BrowserSource.capture() called outside its with-block")

        context: BrowserContext | None = None
        try:
            context = self._browser.new_context()
            return self._capture_in_context(context, page_url)
        except PlaywrightError as e:
            raise AcquisitionError(page_url, str(e)) from e
        except ValueError as e:
            # Page content the inventory model cannot represent
            raise AcquisitionError(page_url, f"cannot build snapshot: {e}") from e
        finally:
            if context is not None:
                self._close_context(context, page_url)

    def _close_context(self, context: BrowserContext, page_url: str) -> None:
        try:
            context.close()
        except PlaywrightError as e:
            logger.warning("Could not close browser context for %s: %s", page_url, e)

    def _capture_in_context(
        self, context: BrowserContext, page_url: str
    ) -> PageSnapshot:
        page = context.new_page()
        responses: list[RawResponse] = []
        injected: list[dict] = []

        def on_response(response: Response) -> None:
            if response.request.resource_type not in _CAPTURED_RESOURCE_TYPES:
                return
            try:
                # headers_array keeps repeated names and set-cookie
                pairs = tuple(
                    (header["name"], header["value"])
                    for header in response.headers_array()
                )
            except PlaywrightError as e:
                logger.debug("Header capture failed for %s: %s", response.url, e)
                return
            responses.append(RawResponse(url=response.url, header_pairs=pairs))

        page.on("response", on_response)
        page.goto(page_url, wait_until="networkidle", timeout=self._nav_timeout_ms)

        page.expose_binding(
            _BINDING_NAME, lambda _source, payload: injected.append(payload)
        )
        page.evaluate(_OBSERVER_JS)
        page.wait_for_timeout(self._wait_ms)
        page.evaluate(_DISCONNECT_JS)

        for event in injected:
            logger.debug("Script injected on %s: %s", page_url, event.get("outerHTML"))

        raw_scripts = [
            RawScript(src=item.get("src"), text=item.get("text") or "")
            for item in page.evaluate(_COLLECT_JS)
        ]
        return build_page_snapshot(
            page_url,
            raw_scripts,
            responses,
            timestamp=utc_now_iso(),
        )
