"""HTTP/HTTPS byte source.

Fetches image bytes with a single GET request. Failures are reported as
AcquisitionError and never retried; any timeout policy is the client's.
"""

from __future__ import annotations

import httpx
from loguru import logger

from imgmeta.core.config import HTTPConfig
from imgmeta.core.exceptions import AcquisitionError

from .base import ClassifiedSource


class HTTPByteSource:
    """Byte source for http:// and https:// URLs.

    Example:
        source = HTTPByteSource(HTTPConfig(timeout_seconds=10))
        data = await source.fetch_bytes(
            ClassifiedSource(SourceKind.REMOTE, locator="https://example.com/a.jpg")
        )
    """

    def __init__(
        self,
        config: HTTPConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize HTTP byte source.

        Args:
            config: Timeout, redirect and user agent settings.
            client: Shared client to use instead of one client per request.
                The caller owns its lifecycle.
        """
        self._config = config or HTTPConfig()
        self._client = client

    def _get_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Accept": "image/jpeg, image/*;q=0.8, */*;q=0.5",
        }

    async def fetch_bytes(self, source: ClassifiedSource) -> bytes:
        """Download the full response body.

        Raises:
            AcquisitionError: On a non-2xx status, timeout, transport error or a
                URL httpx cannot parse.
        """
        url = source.locator or ""
        try:
            if self._client is not None:
                response = await self._client.get(url, headers=self._get_headers())
            else:
                async with httpx.AsyncClient(
                    timeout=self._config.timeout_seconds,
                    follow_redirects=self._config.follow_redirects,
                    headers=self._get_headers(),
                ) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AcquisitionError(
                url, f"HTTP {e.response.status_code}: {e.response.reason_phrase}"
            ) from e
        except httpx.TimeoutException as e:
            raise AcquisitionError(url, "Request timed out") from e
        except httpx.RequestError as e:
            raise AcquisitionError(url, str(e) or type(e).__name__) from e
        except httpx.InvalidURL as e:
            raise AcquisitionError(url, f"Invalid URL: {e}") from e

        data = response.content
        logger.debug(
            f"Fetched {len(data)} bytes from {url} "
            f"(HTTP {response.status_code}, {response.headers.get('Content-Type', 'unknown')})"
        )
        return data
