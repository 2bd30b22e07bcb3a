"""Remote documents: fetch a URL, parse it, hand it to a controller.

``DocumentFetcher`` wraps ``httpx.Client`` with a lazy import so that the base
install (no httpx/tenacity) never triggers an ``ImportError`` at module
level.  The ``httpx`` and ``tenacity`` packages are only required when
``DocumentFetcher`` is *instantiated*.

Transport errors (connection resets, timeouts) are retried with exponential
backoff via ``tenacity``.  A non-200 status or an exhausted retry budget is
reported as ``None`` (an "empty response") and the caller leaves its
current view untouched.

Fetched bodies are kept per URL in a ``TTLCache``; every ``fetch()`` still
parses a fresh live ``Document``, since documents are mutable.

Install the optional dependency with::

    pip install dom-canvas[fetch]

Example::

    from dom_canvas.fetch import DocumentFetcher

    fetcher = DocumentFetcher()
    document = fetcher.fetch("https://example.com")
    if document is not None:
        view.load(document)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cachetools import TTLCache

from dom_canvas.debounce import Debouncer
from dom_canvas.document import Document, parse_html

if TYPE_CHECKING:
    from dom_canvas.controller import InteractionController
    from dom_canvas.protocols import Scheduler

__all__ = ["DocumentFetcher", "RemoteDocumentLoader"]

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """Fetches and parses remote HTML documents.

    Performs a lazy import of ``httpx`` and ``tenacity`` inside ``__init__``.

    Args:
        client: An ``httpx.Client`` to send requests with.  When None, the
            fetcher creates (and owns) one with ``timeout`` and redirects
            followed.
        timeout: Request timeout in seconds for an owned client.
        max_attempts: Attempts per URL when transport errors occur.
        retry_wait: Multiplier for the exponential backoff between attempts,
            in seconds.
        cache_ttl: Seconds a fetched body stays cached.
        max_cache_size: Maximum number of cached URLs.

    Raises:
        ImportError: If ``httpx`` or ``tenacity`` is not installed.  The
            message includes the install command.
    """

    def __init__(
        self,
        client: Any = None,
        timeout: float = 10.0,
        max_attempts: int = 3,
        retry_wait: float = 0.1,
        cache_ttl: float = 60.0,
        max_cache_size: int = 32,
    ) -> None:
        try:
            import httpx
            from tenacity import (
                retry,
                retry_if_exception_type,
                stop_after_attempt,
                wait_exponential,
            )
        except ImportError as exc:
            raise ImportError(
                "httpx and tenacity are required for DocumentFetcher. "
                "Install with: pip install dom-canvas[fetch]"
            ) from exc

        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)

        # Any annotation: httpx is a lazy import.
        self._httpx: Any = httpx
        self._owns_client = client is None
        self._client: Any = (
            client
            if client is not None
            else httpx.Client(timeout=timeout, follow_redirects=True)
        )
        self._cache: TTLCache[str, str] = TTLCache(maxsize=max_cache_size, ttl=cache_ttl)

        _retry = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_exponential(multiplier=retry_wait, max=5),
            stop=stop_after_attempt(max_attempts),
            reraise=True,
        )
        self._get = _retry(self._raw_get)

    def __repr__(self) -> str:
        return f"DocumentFetcher(cached={self._cache.currsize})"

    def fetch(self, url: str) -> Document | None:
        """Return a freshly parsed Document for ``url``, or None.

        Args:
            url: Absolute URL.  Empty or blank strings return None without a
                request.

        Returns:
            A live ``Document``, or None when the request failed or the
            response status was not 200.
        """
        url = (url or "").strip()
        if not url:
            return None

        body = self._cache.get(url)
        if body is not None:
            logger.debug("Cache hit for %s", url)
            return parse_html(body)

        try:
            response = self._get(url)
        except (self._httpx.HTTPError, self._httpx.InvalidURL) as exc:
            logger.warning("Fetching %s failed: %s", url, exc)
            return None

        if response.status_code != 200:
            logger.warning("Fetching %s returned HTTP %d", url, response.status_code)
            return None

        body = response.text
        self._cache[url] = body
        return parse_html(body)

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def _raw_get(self, url: str) -> Any:
        """Make the raw GET; retried by tenacity via ``_get``."""
        return self._client.get(url)


class RemoteDocumentLoader:
    """Debounced URL submission feeding a controller.

    ``submit()`` marks the loader as loading and schedules the fetch after a
    quiet window; a new submission inside the window replaces the old one.
    When the fetch finishes ``loading`` is cleared, and only a successful
    fetch replaces the controller's view.

    Args:
        controller:   View that receives fetched documents.
        fetcher:      Object with ``fetch(url) -> Document | None``.
        scheduler:    Timer source for the debounce.
        submit_delay: Quiet window in seconds.
    """

    def __init__(
        self,
        controller: InteractionController,
        fetcher: Any,
        scheduler: Scheduler | None = None,
        submit_delay: float = 0.2,
    ) -> None:
        self._controller = controller
        self._fetcher = fetcher
        self._debounce = Debouncer(submit_delay, scheduler)
        self.loading = False

    def submit(self, url: str) -> bool:
        """Queue ``url`` for loading.  Returns False for empty input."""
        url = (url or "").strip()
        if not url:
            return False
        self.loading = True
        self._debounce.call(self._load, url)
        return True

    def cancel(self) -> None:
        self._debounce.cancel()
        self.loading = False

    def _load(self, url: str) -> bool:
        try:
            document = self._fetcher.fetch(url)
        finally:
            self.loading = False
        if document is None:
            return False
        return self._controller.load(document)
