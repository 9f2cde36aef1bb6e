from __future__ import annotations
from typing import Optional, Union
import logging

import httpx

from ..config import Settings, load_settings
from ..exceptions import TransportError
from ..query.builder import Query

log = logging.getLogger("factual_query.transport")


class HttpTransport:
    """
    Issues one GET per query and hands back the raw response body.
    No retries, no auth and no response parsing happen here.
    """

    def __init__(self, settings: Optional[Settings] = None, *, client: Optional[httpx.Client] = None):
        self.settings = settings or load_settings()
        self._headers = {"User-Agent": self.settings.user_agent, **self.settings.default_headers}
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.settings.timeout)

    def build_url(self, path: str, query: Union[Query, str, None] = None) -> str:
        qs = query.to_url_query() if isinstance(query, Query) else (query or "")
        url = f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"
        return f"{url}?{qs}" if qs else url

    def get(self, path: str, query: Union[Query, str, None] = None) -> bytes:
        url = self.build_url(path, query)
        log.debug("GET %s", url)
        try:
            r = self._client.get(url, headers=self._headers)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.warning("GET %s failed with HTTP %s", url, status)
            raise TransportError(f"HTTP {status} from {url}", url=url, status_code=status) from e
        except httpx.HTTPError as e:
            log.warning("GET %s failed: %s", url, e)
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e
        return r.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = ["HttpTransport"]
