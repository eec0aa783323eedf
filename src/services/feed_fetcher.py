# src/services/feed_fetcher.py

"""HTTP retrieval of vendor feed bodies."""

from curl_cffi import requests as curl_requests

from src.config.logging_config import feed_logger
from src.config.settings import Settings
from src.models.errors import FetchError


class FeedFetcher:
    """Fetch feed XML over a browser-impersonating session.

    A failed request is reported once as :class:`FetchError`; the next
    scheduled build is the retry.
    """

    def __init__(
        self,
        session: curl_requests.Session | None = None,
        timeout: int | None = None,
    ) -> None:
        self.settings = Settings()
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = (
            timeout or self.settings.REQUEST_TIMEOUT
        )

    def fetch(self, url: str, slug: str = "") -> bytes:
        """GET *url* and return the raw body.

        The body stays undecoded so the XML parser honours the encoding
        declared by the feed.

        Raises:
            FetchError: on a non-2xx status or any transport failure.
        """
        log = feed_logger("fetcher", slug)
        log.info("Fetching %s", url)
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            msg = f"Request to {url} failed: {exc}"
            raise FetchError(msg, slug=slug) from exc

        if not 200 <= resp.status_code < 300:
            msg = f"HTTP {resp.status_code} from {url}"
            raise FetchError(
                msg, slug=slug, status_code=resp.status_code
            )

        body: bytes = resp.content
        log.debug("Received %d bytes", len(body))
        return body

    def close(self) -> None:
        """Release the underlying session."""
        self.session.close()
