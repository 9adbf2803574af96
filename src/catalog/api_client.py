"""
WooCommerce API Client

Shared client for the WooCommerce and WordPress REST APIs.
Handles authentication, rate limiting, pagination and error handling.
"""

import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)


class WooCommerceAPIClient:
    """
    Shared client for the WordPress REST API of a WooCommerce store.

    Handles:
    - Authentication (consumer key/secret over HTTPS basic auth)
    - Rate limiting (4 requests/second)
    - Error handling and retries
    - Pagination via the X-WP-TotalPages header

    Usage:
        client = WooCommerceAPIClient("https://shop.example.com", "ck_xxx", "cs_xxx")

        # Single request
        tags = client.request("GET", "wc/v3/products/tags", params={"slug": "wijn"})

        # All pages
        products = client.get_all("wc/v3/products", params={"tag": 15})
    """

    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
    PER_PAGE = 100

    def __init__(self, store_url: str, consumer_key: str, consumer_secret: str):
        """
        Initialize the API client.

        Args:
            store_url: Store URL (scheme optional, e.g. "shop.example.com")
            consumer_key: WooCommerce REST API consumer key
            consumer_secret: WooCommerce REST API consumer secret
        """
        # Normalize store URL
        store_url = store_url.strip().rstrip("/")
        if not store_url.startswith(("http://", "https://")):
            store_url = f"https://{store_url}"

        self.store_url = store_url
        self.base_url = f"{self.store_url}/wp-json"

        self.session = requests.Session()
        self.session.auth = (consumer_key, consumer_secret)
        self.session.headers.update({
            "Accept": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.25  # 4 req/sec

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (4 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[requests.Response]:
        """
        Send a request with rate limiting, retries and error handling.

        Returns:
            Successful response or None on error
        """
        url = urljoin(self.base_url + "/", endpoint)

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                if method == "GET":
                    response = self.session.get(url, params=params, timeout=timeout)
                elif method == "POST":
                    response = self.session.post(url, params=params, json=data, timeout=timeout)
                elif method == "PUT":
                    response = self.session.put(url, params=params, json=data, timeout=timeout)
                elif method == "DELETE":
                    response = self.session.delete(url, params=params, timeout=timeout)
                else:
                    raise ValueError(f"Unsupported method: {method}")

                # Retry on rate limiting or server errors
                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    retry_after = int(response.headers.get("Retry-After", 2 ** attempt))
                    logger.warning("HTTP %d on %s, retry %d/%d in %ds...",
                                   response.status_code, endpoint, attempt + 1,
                                   self.MAX_RETRIES, retry_after)
                    time.sleep(retry_after)
                    continue

                # Check for errors
                if response.status_code >= 400:
                    error_msg = response.text[:200]
                    logger.error("API Error %d on %s: %s", response.status_code, endpoint, error_msg)
                    return None

                return response

            except requests.exceptions.Timeout:
                logger.error("Request timeout: %s", endpoint)
                return None
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                return None

        logger.error("Max retries (%d) exceeded for %s %s", self.MAX_RETRIES, method, endpoint)
        return None

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Any]:
        """
        Make REST API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API route below /wp-json (e.g., "wc/v3/products")
            params: Query string parameters
            data: Request body for POST/PUT
            timeout: Request timeout in seconds

        Returns:
            Response JSON or None on error
        """
        response = self._send(method, endpoint, params=params, data=data, timeout=timeout)
        if response is None:
            return None

        try:
            return response.json()
        except ValueError:
            logger.error("Invalid JSON from %s", endpoint)
            return None

    def get_all(self, endpoint: str, params: Optional[Dict] = None, timeout: int = 30) -> Optional[List[Any]]:
        """
        Fetch every page of a collection endpoint.

        Args:
            endpoint: Collection route (e.g., "wc/v3/products")
            params: Query string parameters (page/per_page are managed here)
            timeout: Request timeout in seconds

        Returns:
            All items in page order, or None if any page failed
        """
        items: List[Any] = []
        page = 1

        while True:
            page_params = dict(params or {})
            page_params.update({"page": page, "per_page": self.PER_PAGE})

            response = self._send("GET", endpoint, params=page_params, timeout=timeout)
            if response is None:
                return None

            try:
                batch = response.json()
            except ValueError:
                logger.error("Invalid JSON from %s (page %d)", endpoint, page)
                return None

            if not isinstance(batch, list):
                logger.error("Expected a list from %s, got %s", endpoint, type(batch).__name__)
                return None

            items.extend(batch)

            total_pages = int(response.headers.get("X-WP-TotalPages", page) or page)
            if page >= total_pages or not batch:
                break
            page += 1

        logger.debug("Fetched %d items from %s in %d page(s)", len(items), endpoint, page)
        return items

    def test_connection(self) -> bool:
        """
        Test API connection by fetching the WooCommerce route index.

        Returns:
            True if connection successful
        """
        result = self.request("GET", "wc/v3")
        if isinstance(result, dict) and result.get("namespace") == "wc/v3":
            logger.info("Connected to: %s", self.store_url)
            return True
        return False
