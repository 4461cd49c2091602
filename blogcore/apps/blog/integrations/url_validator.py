"""Reachability check for post source URLs."""

from typing import Optional, Protocol
from urllib.parse import urlparse

import requests
from pydantic import BaseModel

from blogcore.core.utils.logging import get_logger

logger = get_logger("url_validator")


class UrlCheck(BaseModel):
    url: str
    reachable: bool
    final_url: Optional[str] = None
    status_code: Optional[int] = None
    reason: Optional[str] = None


class UrlValidator(Protocol):
    def check(self, url: str) -> UrlCheck: ...


class RedirectValidator:
    """Follow redirects and report whether the URL ends at a live page.

    Blocks the caller for up to ``timeout`` seconds per request. Network
    failures are reported as unreachable, never raised.
    """

    def __init__(
        self, timeout: float = 5.0, session: Optional[requests.Session] = None
    ):
        self.timeout = timeout
        self.http = session or requests.Session()

    def check(self, url: str) -> UrlCheck:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return UrlCheck(url=url, reachable=False, reason="is not a valid URL")

        try:
            resp = self.http.head(url, allow_redirects=True, timeout=self.timeout)
            if resp.status_code == 405:
                resp = self.http.get(
                    url, allow_redirects=True, timeout=self.timeout, stream=True
                )
                resp.close()
        except requests.Timeout:
            logger.warning("Timed out resolving %s", url)
            return UrlCheck(url=url, reachable=False, reason="timed out")
        except requests.RequestException as e:
            logger.warning("Could not resolve %s: %s", url, e)
            return UrlCheck(url=url, reachable=False, reason="could not be reached")

        reachable = resp.status_code < 400
        return UrlCheck(
            url=url,
            reachable=reachable,
            final_url=resp.url,
            status_code=resp.status_code,
            reason=None if reachable else f"responded with {resp.status_code}",
        )
