# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""README and wiki include tags.

README flow (first applicable step wins):
    cache hit  -> cached text
    fetch      -> Success: normalize -> rewrite links -> provenance header -> cache.put -> text
               -> anything else: localized diagnostic (never cached)

Wiki flow:
    fetch      -> Success: normalize -> converter(markdown) -> html
               -> converter raises: localized diagnostic
               -> anything else: localized diagnostic

Neither flow raises on fetch, cache or converter trouble; the page build always gets a string.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .cache_store import CacheStore, derive_key
from .common import IncludeSettings
from .encoding import normalize
from .fetcher import GitHubFetcher
from .links import base_for_download_url, rewrite
from .messages import format_converter_error, format_diagnostic, format_invalid_markup, provenance_header
from .results import DocumentKind, FetchRequest, ResultKind

logger = logging.getLogger(__name__)

MarkdownConverter = Callable[[str], str]


class ReadmeTag:
    """Cached README include for one FetchRequest."""

    def __init__(
        self,
        request: FetchRequest,
        *,
        fetcher: GitHubFetcher,
        cache: CacheStore,
        settings: Optional[IncludeSettings] = None,
    ):
        self.request = request
        self.fetcher = fetcher
        self.cache = cache
        self.settings = settings or fetcher.settings
        self.last_kind: Optional[ResultKind] = None

    @property
    def cache_key(self) -> str:
        return derive_key(self.request.owner, self.request.repo, self.request.ref)

    def render(self) -> str:
        req = self.request
        key = self.cache_key

        cached = self.cache.get(key)
        if cached is not None:
            self.last_kind = ResultKind.SUCCESS
            return cached

        result = self.fetcher.fetch_readme(req)
        self.last_kind = result.kind
        if result.kind != ResultKind.SUCCESS:
            logger.info("README %s@%s: %s", req.slug, req.ref, result.kind.value)
            return format_diagnostic(result, req, DocumentKind.README, locale=self.settings.locale)

        text = normalize(result.payload)
        base_url = base_for_download_url(
            result.download_url, req.owner, req.repo, req.ref, raw_url=self.settings.raw_url
        )
        text = rewrite(text, base_url, req.owner, req.repo, web_url=self.settings.web_url)
        output = provenance_header(req, web_url=self.settings.web_url) + text

        self.cache.put(key, output)
        return output


class WikiTag:
    """Uncached wiki include; output is the converter's HTML."""

    def __init__(
        self,
        request: FetchRequest,
        *,
        fetcher: GitHubFetcher,
        converter: MarkdownConverter,
        settings: Optional[IncludeSettings] = None,
    ):
        self.request = request
        self.fetcher = fetcher
        self.converter = converter
        self.settings = settings or fetcher.settings
        self.last_kind: Optional[ResultKind] = None

    def render(self) -> str:
        req = self.request
        result = self.fetcher.fetch_wiki(req)
        self.last_kind = result.kind
        if result.kind != ResultKind.SUCCESS:
            logger.info("Wiki %s/%s: %s", req.slug, req.page, result.kind.value)
            return format_diagnostic(result, req, DocumentKind.WIKI, locale=self.settings.locale)
        try:
            return self.converter(normalize(result.payload))
        except Exception as e:
            logger.warning("Wiki %s/%s: converter failed: %s", req.slug, req.page, e)
            self.last_kind = ResultKind.TRANSIENT_ERROR
            return format_converter_error(req, str(e) or type(e).__name__, locale=self.settings.locale)


def render_readme(
    markup: str,
    *,
    fetcher: GitHubFetcher,
    cache: CacheStore,
    settings: Optional[IncludeSettings] = None,
) -> str:
    """Parse "owner, repo[, ref]" and render; malformed markup yields a diagnostic."""
    settings = settings or fetcher.settings
    try:
        req = FetchRequest.parse(markup, DocumentKind.README)
    except ValueError as e:
        return format_invalid_markup(markup, str(e), locale=settings.locale)
    return ReadmeTag(req, fetcher=fetcher, cache=cache, settings=settings).render()


def render_wiki(
    markup: str,
    *,
    fetcher: GitHubFetcher,
    converter: MarkdownConverter,
    settings: Optional[IncludeSettings] = None,
) -> str:
    """Parse "owner, repo[, page]" and render; malformed markup yields a diagnostic."""
    settings = settings or fetcher.settings
    try:
        req = FetchRequest.parse(markup, DocumentKind.WIKI)
    except ValueError as e:
        return format_invalid_markup(markup, str(e), locale=settings.locale)
    return WikiTag(req, fetcher=fetcher, converter=converter, settings=settings).render()
