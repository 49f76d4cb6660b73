"""HTTP fetcher for retrieving page HTML."""

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional

import requests

from seo_tags.config import settings
from seo_tags.constants import DEFAULT_ACCEPT_HEADER, EXPONENTIAL_BACKOFF_BASE
from seo_tags.exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass
class FetchResponse:
    """Outcome of an HTTP request that reached the server."""

    url: str
    ok: bool
    status_code: int
    status_text: str
    body: str
    load_time: float = 0.0


class WebFetcher:
    """Fetches pages over HTTP for tag analysis."""

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the fetcher.

        Args:
            user_agent: User agent string. Defaults to settings.USER_AGENT.
            timeout: Request timeout in seconds. Defaults to settings.REQUEST_TIMEOUT.
            max_retries: Attempts made on transport errors. Defaults to settings.MAX_RETRIES.
            session: Optional preconfigured requests session
        """
        self.user_agent = user_agent or settings.USER_AGENT
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.max_retries = max(1, max_retries if max_retries is not None else settings.MAX_RETRIES)

        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": self.user_agent,
            "Accept": DEFAULT_ACCEPT_HEADER,
            "Accept-Language": "en-US,en;q=0.9",
        })

    def fetch(self, url: str) -> FetchResponse:
        """Fetch a URL.

        Non-success HTTP statuses are returned (ok=False), not raised.

        Args:
            url: The URL to fetch

        Returns:
            FetchResponse with the body and upstream status

        Raises:
            FetchError: If no response could be obtained after all attempts
        """
        last_error = None

        for attempt in range(self.max_retries):
            if attempt > 0:
                delay = (EXPONENTIAL_BACKOFF_BASE ** attempt) + random.uniform(0, 1)
                logger.warning(
                    f"Retrying {url} in {delay:.1f}s (attempt {attempt + 1}/{self.max_retries}): {last_error}"
                )
                time.sleep(delay)

            try:
                start_time = time.time()
                response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
                load_time = time.time() - start_time
            except requests.exceptions.Timeout:
                last_error = f"Request timeout after {self.timeout}s"
                continue
            except requests.exceptions.ConnectionError as e:
                last_error = f"Connection error: {e}"
                continue
            except requests.exceptions.RequestException as e:
                last_error = str(e)
                continue

            logger.debug(f"Fetched {url} -> {response.status_code} in {load_time:.2f}s")
            return FetchResponse(
                url=response.url or url,
                ok=response.ok,
                status_code=response.status_code,
                status_text=response.reason or "",
                body=response.text,
                load_time=load_time,
            )

        raise FetchError(url, f"Failed to fetch URL: {last_error}")

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
