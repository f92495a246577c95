import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Optional

import requests

from app.config.setting import Settings

logger = logging.getLogger(__name__)

FIND_BY_USER_ENDPOINT = "/api/en/transaction/find-by-user"
SEARCH_ENDPOINT = "/api/en/transaction/search"


class YaYaAPIError(Exception):
    """Raised when a call to the YaYa Wallet API fails for any reason."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details if details is not None else message


class YaYaAPI:
    def __init__(self, settings: Settings):
        """Signed REST client for the YaYa Wallet API."""
        self.base_url = settings.yaya_base_url.rstrip("/")
        self.api_key = settings.yaya_api_key
        self.api_secret = settings.yaya_api_secret
        self.timeout = settings.request_timeout

    def sign_request(self, method: str, endpoint: str, body: str = "", timestamp: Optional[str] = None):
        """
        Sign a request the way YaYa expects.

        Args:
            method (str): HTTP method, any case.
            endpoint (str): Request path without host or query string.
            body (str): Serialized JSON body, empty for GET.
            timestamp (str): Milliseconds since the epoch. Defaults to now.

        Returns:
            tuple: (timestamp, base64 HMAC-SHA256 signature)
        """
        if timestamp is None:
            timestamp = str(int(time.time() * 1000))
        prehash = f"{timestamp}{method.upper()}{endpoint}{body}"

        digest = hmac.new(
            self.api_secret.encode("utf-8"),
            prehash.encode("utf-8"),
            hashlib.sha256,
        ).digest()
        signature = base64.b64encode(digest).decode("ascii")
        return timestamp, signature

    def build_headers(self, timestamp: str, signature: str) -> dict:
        return {
            "Content-Type": "application/json",
            "YAYA-API-KEY": self.api_key,
            "YAYA-API-TIMESTAMP": timestamp,
            "YAYA-API-SIGN": signature,
        }

    def request(self, method: str, endpoint: str, body: Optional[dict] = None, params: Optional[dict] = None):
        """Send a signed request and return the decoded JSON response."""
        # The signed string and the sent payload must be byte-identical
        body_string = json.dumps(body, separators=(",", ":"), ensure_ascii=False) if body is not None else ""
        timestamp, signature = self.sign_request(method, endpoint, body_string)

        try:
            response = requests.request(
                method.upper(),
                f"{self.base_url}{endpoint}",
                headers=self.build_headers(timestamp, signature),
                params=params or None,
                data=body_string.encode("utf-8") if body is not None else None,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            details = self._error_details(e.response) or str(e)
            logger.error(f"YaYa API error: {details}")
            raise YaYaAPIError(str(e), status_code=status_code, details=details) from e
        except requests.RequestException as e:
            # includes requests' JSONDecodeError for non-JSON bodies
            logger.error(f"YaYa API error: {e}")
            raise YaYaAPIError(str(e)) from e

    def find_by_user(self, page: int = 1) -> dict:
        """Fetch one page of the current user's transactions."""
        return self.request("GET", FIND_BY_USER_ENDPOINT, params={"page": page})

    def search(self, query: str) -> dict:
        """Search the current user's transactions."""
        return self.request("POST", SEARCH_ENDPOINT, body={"query": query})

    @staticmethod
    def _error_details(response):
        if response is None:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
