"""
HTTP fetching.

A single GET helper used by every scraper. Network problems and non-2xx
responses are turned into FetchError so callers only need to catch one type.
There are no retries: a failed fetch is reported to whoever asked for it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

USER_AGENT = "duscrape/0.1"

SESSION = requests.Session()
SESSION.headers["User-Agent"] = USER_AGENT


class FetchError(Exception):
    """
    Raised when a page could not be fetched.

    status_code is set when the server answered with an error status,
    and None for connection-level failures (DNS, refused, timeout, ...).
    """

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.url}: HTTP {self.status_code} ({self.reason})"
        return f"{self.url}: {self.reason}"


def fetch_html(
    url: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """
    GET url and return the response body as text.

    Raises FetchError for any requests failure, including HTTP error statuses.
    """
    http = session if session is not None else SESSION
    try:
        resp = http.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise FetchError(url, str(exc), status_code=status) from exc
    except requests.RequestException as exc:
        raise FetchError(url, str(exc)) from exc
    return resp.text
