# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Human-readable diagnostics substituted into the page when a fetch fails.

Diagnostics always name owner/repo so a broken include can be traced from the
rendered page. Locales: "en" (default) and "zh".
"""

from __future__ import annotations

import math
import time
from typing import Dict, Optional

from .common import DEFAULT_LOCALE, GITHUB_WEB_URL
from .results import DocumentKind, FetchRequest, FetchResult, ResultKind

_MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "doc.readme": "README",
        "doc.wiki": "wiki page",
        "not_found": "Could not find the {doc} for {slug} ({where}).",
        "rate_limited": (
            "GitHub API rate limit exceeded while fetching the {doc} for {slug} "
            "(limit {limit} requests/hour). Try again in about {wait}."
        ),
        "rate_limited_unknown_reset": (
            "GitHub API rate limit exceeded while fetching the {doc} for {slug} (limit {limit} requests/hour)."
        ),
        "transient_error": "Could not fetch the {doc} for {slug}: {message}",
        "timeout": "Timed out fetching the {doc} for {slug}.",
        "invalid_markup": "Invalid GitHub include {markup!r}: {message}",
        "converter_error": "Could not convert the {doc} for {slug} ({where}): {message}",
        "where.readme": "ref {ref}",
        "where.wiki": "page {page}",
        "unknown": "unknown",
        "minute": "{n} minute",
        "minutes": "{n} minutes",
        "hour": "{n} hour",
        "hours": "{n} hours",
    },
    "zh": {
        "doc.readme": "README文件",
        "doc.wiki": "Wiki 内容",
        "not_found": "无法获取{doc}: 未找到 {slug} ({where})",
        "rate_limited": "获取 {slug} 的{doc}时超出 GitHub API 速率限制 (每小时 {limit} 次), 请约 {wait}后重试",
        "rate_limited_unknown_reset": "获取 {slug} 的{doc}时超出 GitHub API 速率限制 (每小时 {limit} 次)",
        "transient_error": "获取 {slug} 的{doc}时出错: {message}",
        "timeout": "获取 {slug} 的{doc}时超时",
        "invalid_markup": "无效的 GitHub 引用参数 {markup!r}: {message}",
        "converter_error": "转换 {slug} 的{doc}时出错 ({where}): {message}",
        "where.readme": "分支 {ref}",
        "where.wiki": "页面 {page}",
        "unknown": "未知",
        "minute": "{n} 分钟",
        "minutes": "{n} 分钟",
        "hour": "{n} 小时",
        "hours": "{n} 小时",
    },
}


def _catalog(locale: Optional[str]) -> Dict[str, str]:
    return _MESSAGES.get(str(locale or DEFAULT_LOCALE).lower().split("_")[0], _MESSAGES[DEFAULT_LOCALE])


def format_wait(seconds: int, locale: Optional[str] = DEFAULT_LOCALE) -> str:
    """Whole minutes under an hour, else whole hours ("5 minutes", "2 hours")."""
    msgs = _catalog(locale)
    minutes = max(1, math.ceil(max(0, int(seconds)) / 60))
    if minutes < 60:
        return msgs["minute" if minutes == 1 else "minutes"].format(n=minutes)
    hours = minutes // 60
    return msgs["hour" if hours == 1 else "hours"].format(n=hours)


def format_diagnostic(
    result: FetchResult,
    req: FetchRequest,
    kind: DocumentKind = DocumentKind.README,
    *,
    locale: Optional[str] = DEFAULT_LOCALE,
    now: Optional[float] = None,
) -> str:
    """Describe a non-success FetchResult for the page reader."""
    msgs = _catalog(locale)
    doc = msgs["doc.wiki" if kind == DocumentKind.WIKI else "doc.readme"]
    slug = req.slug

    if result.kind == ResultKind.NOT_FOUND:
        where_key = "where.wiki" if kind == DocumentKind.WIKI else "where.readme"
        where = msgs[where_key].format(ref=req.ref, page=req.page)
        return msgs["not_found"].format(doc=doc, slug=slug, where=where)

    if result.kind == ResultKind.RATE_LIMITED:
        limit = result.limit if result.limit is not None else msgs["unknown"]
        if result.reset_at is None:
            return msgs["rate_limited_unknown_reset"].format(doc=doc, slug=slug, limit=limit)
        current = int(time.time() if now is None else now)
        wait = format_wait(int(result.reset_at) - current, locale)
        return msgs["rate_limited"].format(doc=doc, slug=slug, limit=limit, wait=wait)

    if result.kind == ResultKind.TIMEOUT:
        return msgs["timeout"].format(doc=doc, slug=slug)

    if result.kind == ResultKind.TRANSIENT_ERROR:
        return msgs["transient_error"].format(doc=doc, slug=slug, message=result.message)

    raise ValueError(f"no diagnostic for result kind {result.kind!r}")


def format_invalid_markup(markup: str, message: str, *, locale: Optional[str] = DEFAULT_LOCALE) -> str:
    return _catalog(locale)["invalid_markup"].format(markup=markup, message=message)


def format_converter_error(req: FetchRequest, message: str, *, locale: Optional[str] = DEFAULT_LOCALE) -> str:
    """The wiki page was fetched but the Markdown converter failed on it."""
    msgs = _catalog(locale)
    where = msgs["where.wiki"].format(page=req.page)
    return msgs["converter_error"].format(doc=msgs["doc.wiki"], slug=req.slug, where=where, message=message)


def provenance_header(req: FetchRequest, *, web_url: str = GITHUB_WEB_URL) -> str:
    """`> source: [owner/repo](https://github.com/owner/repo)` block prepended to README output."""
    return f"> source: [{req.slug}]({web_url.rstrip('/')}/{req.slug})\n\n"
