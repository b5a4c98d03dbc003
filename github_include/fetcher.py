# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""GitHub README / wiki fetcher.

Every call performs exactly one GET and converts the outcome into a FetchResult
variant; transport errors, odd status codes and malformed JSON never escape.

    fetcher = GitHubFetcher(token=resolve_token(site_config))
    result = fetcher.fetch_readme(FetchRequest("octocat", "Hello-World"))
    if result.kind == ResultKind.SUCCESS:
        ...

README responses look like:
    {
        "name": "README.md",
        "path": "README.md",
        "encoding": "base64",
        "content": "IyBIZWxsbw0K...\n",
        "download_url": "https://raw.githubusercontent.com/octocat/Hello-World/main/README.md"
    }
"""

from __future__ import annotations

import base64
import binascii
import logging
import time
import urllib.parse
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .common import IncludeSettings, github_include_cache_dir
from .results import (
    FetchRequest,
    FetchResult,
    NotFound,
    RateLimited,
    Success,
    Timeout,
    TransientError,
)

logger = logging.getLogger(__name__)

README_ACCEPT = "application/vnd.github.v3+json"


@dataclass
class FetchStats:
    """Per-fetcher REST counters (one instance per build is typical)."""

    calls_total: int = 0
    errors_total: int = 0
    errors_by_status: Dict[int, int] = field(default_factory=lambda: defaultdict(int))
    time_total_s: float = 0.0


def _safe_int(x: Any) -> Optional[int]:
    try:
        return int(str(x).strip())
    except (ValueError, TypeError):
        return None


class GitHubFetcher:
    """Builds and issues README/wiki requests and classifies the responses.

    Args:
        token: personal access token; None means anonymous requests
        settings: endpoints, timeouts and user agent (defaults to IncludeSettings())
        session: anything with a requests-compatible `get()`; defaults to a requests.Session
    """

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        settings: Optional[IncludeSettings] = None,
        session: Optional[Any] = None,
    ):
        self.token = (token or "").strip() or None
        self.settings = settings or IncludeSettings(cache_dir=github_include_cache_dir())
        self.session = session if session is not None else requests.Session()
        self.stats = FetchStats()
        # Last rate-limit headers seen: {"remaining": 59, "limit": 60, "reset_epoch": 1766947200}
        self.rate_limit_info: Optional[Dict[str, Optional[int]]] = None

    # ----------------------------
    # URL / header construction
    # ----------------------------
    def readme_url(self, req: FetchRequest) -> str:
        owner = urllib.parse.quote(req.owner, safe="")
        repo = urllib.parse.quote(req.repo, safe="")
        query = urllib.parse.urlencode({"ref": req.ref})
        return f"{self.settings.api_url}/repos/{owner}/{repo}/readme?{query}"

    def wiki_url(self, req: FetchRequest) -> str:
        owner = urllib.parse.quote(req.owner, safe="")
        repo = urllib.parse.quote(req.repo, safe="")
        page = urllib.parse.quote(req.page, safe="")
        return f"{self.settings.raw_url}/wiki/{owner}/{repo}/{page}.md"

    def _headers(self, *, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {"User-Agent": self.settings.user_agent}
        if accept:
            headers["Accept"] = accept
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    # ----------------------------
    # Transport
    # ----------------------------
    def _get(self, url: str, headers: Dict[str, str]):
        """session.get wrapper that records per-fetcher counters.

        Returns (response, None) or (None, FetchResult) when the request itself failed.
        """
        self.stats.calls_total += 1
        logger.debug("GH GET %s", url)
        t0 = time.monotonic()
        try:
            resp = self.session.get(url, headers=headers, timeout=self.settings.timeout)
        except requests.exceptions.Timeout as e:
            self.stats.errors_total += 1
            logger.debug("GH GET timed out: %s (%s)", url, e)
            return None, Timeout(message=str(e))
        except requests.exceptions.RequestException as e:
            self.stats.errors_total += 1
            logger.debug("GH GET failed: %s (%s)", url, e)
            return None, TransientError(message=str(e) or e.__class__.__name__)
        finally:
            self.stats.time_total_s += max(0.0, time.monotonic() - t0)

        code = _safe_int(getattr(resp, "status_code", None)) or 0
        if code >= 400 or code == 0:
            self.stats.errors_total += 1
            self.stats.errors_by_status[code] += 1
        self._record_rate_limit(resp)
        logger.debug("GH RESP status=%s remaining=%s", code, (self.rate_limit_info or {}).get("remaining"))
        return resp, None

    def _record_rate_limit(self, resp) -> None:
        headers = getattr(resp, "headers", None) or {}
        remaining = _safe_int(headers.get("X-RateLimit-Remaining"))
        limit = _safe_int(headers.get("X-RateLimit-Limit"))
        reset_epoch = _safe_int(headers.get("X-RateLimit-Reset"))
        if remaining is None and limit is None and reset_epoch is None:
            return
        self.rate_limit_info = {"remaining": remaining, "limit": limit, "reset_epoch": reset_epoch}

    # ----------------------------
    # Classification
    # ----------------------------
    def _classify_error(self, resp) -> FetchResult:
        code = _safe_int(resp.status_code) or 0
        if code == 404:
            return NotFound(status=code)
        if code == 403:
            remaining = _safe_int(resp.headers.get("X-RateLimit-Remaining"))
            if remaining == 0:
                reset_at = _safe_int(resp.headers.get("X-RateLimit-Reset"))
                limit = _safe_int(resp.headers.get("X-RateLimit-Limit"))
                logger.warning("GitHub API rate limit exhausted (limit=%s, reset=%s)", limit, reset_at)
                return RateLimited(remaining=0, limit=limit, reset_at=reset_at)
            return TransientError(message=f"HTTP 403 access denied: {_reason(resp)}", status=code)
        return TransientError(message=f"HTTP {code}: {_reason(resp)}", status=code)

    def fetch_readme(self, req: FetchRequest) -> FetchResult:
        """GET /repos/{owner}/{repo}/readme?ref={ref} and base64-decode the envelope."""
        resp, failure = self._get(self.readme_url(req), self._headers(accept=README_ACCEPT))
        if failure is not None:
            return failure
        if resp.status_code != 200:
            return self._classify_error(resp)

        try:
            data = resp.json()
        except ValueError as e:
            return TransientError(message=f"invalid JSON from GitHub API: {e}", status=200)
        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            return TransientError(message="unexpected README payload (no 'content' field)", status=200)

        try:
            payload = base64.b64decode(data["content"])
        except (binascii.Error, ValueError) as e:
            return TransientError(message=f"invalid base64 README content: {e}", status=200)

        download_url = data.get("download_url")
        return Success(payload=payload, download_url=download_url if isinstance(download_url, str) else None)

    def fetch_wiki(self, req: FetchRequest) -> FetchResult:
        """GET the raw wiki page; the body is the Markdown itself."""
        url = self.wiki_url(req)
        resp, failure = self._get(url, self._headers())
        if failure is not None:
            return failure
        if resp.status_code != 200:
            return self._classify_error(resp)
        return Success(payload=resp.content or b"", download_url=url)


def _reason(resp) -> str:
    """Short description of a failed response (reason phrase, else a body excerpt)."""
    reason = str(getattr(resp, "reason", "") or "").strip()
    if reason:
        return reason
    try:
        body = (resp.text or "").strip()
    except (ValueError, TypeError, AttributeError):
        body = ""
    return body[:200] or "no details"
