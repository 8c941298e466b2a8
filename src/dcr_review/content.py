"""Upstream content: the proxy fetcher, Content API examples and DCR URL derivation."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests

from dcr_review.errors import FetchError
from dcr_review.models import FetchedContent, LatestItem

_LOG = logging.getLogger(__name__)

_GUARDIAN_BASE = "https://www.theguardian.com"
_LOCAL_DCR_BASE = "http://localhost:3030/Interactive"
_CAPI_SEARCH_URL = "https://content.guardianapis.com/search"

BREAKPOINTS = {
    "mobile": 480,
    "leftCol": 1140,
}

EVERGREENS = [
    "https://www.theguardian.com/education/ng-interactive/2020/sep/05/the-best-uk-universities-2021-league-table",
    "https://www.theguardian.com/world/ng-interactive/2020/nov/18/colette-a-former-french-resistance-member-confronts-a-family-tragedy-75-years-later",
    "https://www.theguardian.com/football/ng-interactive/2020/dec/21/the-100-best-male-footballers-in-the-world-2020",
    "https://www.theguardian.com/help/ng-interactive/2017/mar/17/contact-the-guardian-securely",
]

DEFAULT_TARGET = EVERGREENS[0]


def frontend_url(target: str) -> str:
    return f"{_GUARDIAN_BASE}{urlparse(target).path}"


def dcr_variant(url: str, *, local: bool = False) -> str:
    """DCR rendering of ``url`` itself, keeping its host and query."""
    if local:
        return f"{_LOCAL_DCR_BASE}?url={url}"
    separator = "&" if urlparse(url).query else "?"
    return f"{url}{separator}dcr"


def dcr_url(target: str, *, local: bool = False) -> str:
    return dcr_variant(frontend_url(target), local=local)


class ContentFetcher:
    def __init__(self, timeout_seconds: float = 20.0) -> None:
        self._timeout = timeout_seconds

    def fetch(self, url: str) -> FetchedContent:
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise FetchError(url, "only absolute http(s) URLs can be proxied")
        try:
            response = requests.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            _LOG.warning("proxy.fetch.error url=%s error=%s", url, exc)
            raise FetchError(url, str(exc)) from exc
        return FetchedContent(body=response.content, content_type=response.headers.get("Content-Type"))


class ItemSource:
    """Recent interactives from the Guardian Content API, used as example links."""

    def __init__(self, api_key: str = "test", timeout_seconds: float = 20.0) -> None:
        self._api_key = api_key
        self._timeout = timeout_seconds

    def list_recent(self) -> list[LatestItem]:
        try:
            response = requests.get(
                _CAPI_SEARCH_URL,
                params={
                    "api-key": self._api_key,
                    "type": "interactive",
                    "page-size": 20,
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            _LOG.warning("capi.search.error error=%s", exc)
            raise FetchError(_CAPI_SEARCH_URL, str(exc)) from exc

        results = (payload.get("response") or {}).get("results") or []
        out: list[LatestItem] = []
        for item in results:
            web_url = str(item.get("webUrl", "") or "")
            if not web_url:
                continue
            out.append(LatestItem(web_url=web_url, api_url=str(item.get("apiUrl", "") or "")))
        return out
