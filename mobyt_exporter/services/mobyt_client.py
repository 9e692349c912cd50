"""
Mobyt Exporter - Upstream Client
Authenticated GET requests against the Mobyt REST API.

One httpx.Client is shared by every collection cycle. TLS certificates are
never verified and httpx default timeouts apply. Nothing is retried.
"""
import logging
from typing import Dict, Optional

import httpx

from mobyt_exporter.models.schemas import SessionCredentials
from mobyt_exporter.services.decoders import decode_session_credentials
from mobyt_exporter.services.errors import AuthError, TransportError

logger = logging.getLogger(__name__)

LOGIN_URI = "/API/v1.0/REST/login"
STATUS_URI = "/API/v1.0/REST/status"
HISTORY_URI = "/API/v1.0/REST/smshistory"


class MobytClient:
    """Thin wrapper over httpx.Client for the three vendor calls"""

    def __init__(self, endpoint: str, transport: Optional[httpx.BaseTransport] = None):
        self.endpoint = endpoint.rstrip("/")
        self._client = httpx.Client(base_url=self.endpoint, verify=False, transport=transport)

    def authenticate(self, username: str, password: str) -> SessionCredentials:
        """
        GET the login URI with HTTP Basic auth and parse "<user_key>;<session_key>".

        Raises:
            AuthError: network failure, non-2xx status or malformed body
        """
        logger.info("Getting session authentication")
        try:
            response = self._client.get(LOGIN_URI, auth=(username, password))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AuthError(f"login returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AuthError(f"login request to {self.endpoint}{LOGIN_URI} failed: {e}") from e

        credentials = decode_session_credentials(response.content)
        logger.info("Session authentication: Ok")
        return credentials

    def fetch(
        self,
        path: str,
        params: Dict[str, str],
        credentials: SessionCredentials,
    ) -> bytes:
        """
        GET path with the session headers and return the raw body.

        Raises:
            TransportError: network failure or non-2xx status
        """
        url = f"{self.endpoint}{path}"
        try:
            request = self._client.build_request(
                "GET", path, params=params, headers=credentials.as_headers()
            )
            url = str(request.url)
            logger.info(f"Requesting {url}")
            response = self._client.send(request)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{url} returned HTTP {e.response.status_code}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"request to {url} failed: {e}", url=url) from e

        return response.content

    def close(self):
        """Close the underlying connection pool"""
        self._client.close()
        logger.info("Mobyt HTTP client closed")
