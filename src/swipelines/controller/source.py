"""
Content Source (HTTP)
=====================
Fetches one batch of lines from the remote provider.

The provider returns a single random line per GET, so a batch is `n`
concurrent requests. Any failure aborts the whole batch; callers never see a
partial one.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import requests

from swipelines.config import API_URL, DEFAULT_CATEGORY, REQUEST_TIMEOUT
from swipelines.model.item import Item

logger = logging.getLogger(__name__)

# Upper bound on concurrent requests per batch
MAX_FETCH_WORKERS = 16


class BatchFetchError(Exception):
    """Raised when any request of a batch fails."""


class BatchSource:
    def __init__(
        self,
        url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT,
        default_category: str = DEFAULT_CATEGORY,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.default_category = default_category
        self.session = session if session is not None else requests.Session()

    def fetch_batch(self, n: int) -> list[Item]:
        """
        Fetch and normalize `n` items.

        Raises:
            BatchFetchError: If any request fails or returns an unusable body.
        """
        if n <= 0:
            return []
        logger.info(f"Requesting {n} lines from {self.url}")

        with ThreadPoolExecutor(max_workers=min(n, MAX_FETCH_WORKERS)) as pool:
            futures = [pool.submit(self._fetch_one) for _ in range(n)]
            try:
                payloads = [future.result() for future in futures]
            except (requests.RequestException, ValueError) as e:
                for future in futures:
                    future.cancel()
                raise BatchFetchError(f"Failed to fetch batch: {e}") from e

        try:
            items = [Item.from_payload(payload, self.default_category) for payload in payloads]
        except ValueError as e:
            raise BatchFetchError(f"Malformed response: {e}") from e

        logger.debug(f"Fetched {len(items)} lines.")
        return items

    def _fetch_one(self) -> Any:
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        # requests raises a ValueError subclass on a non-JSON body
        return response.json()
