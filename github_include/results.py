# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Request/result types shared by the fetcher, the tags and the diagnostics.

This module MUST NOT import other github_include modules to avoid cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


DEFAULT_REF = "main"
DEFAULT_WIKI_PAGE = "Home"


class DocumentKind(str, Enum):
    """Which tag variant a request belongs to."""

    README = "readme"
    WIKI = "wiki"


class ResultKind(str, Enum):
    """Discriminator for FetchResult variants."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    TRANSIENT_ERROR = "transient_error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class FetchRequest:
    """One README/wiki lookup, built once per tag invocation."""

    owner: str
    repo: str
    ref: str = DEFAULT_REF
    page: str = DEFAULT_WIKI_PAGE

    def __post_init__(self) -> None:
        owner = (self.owner or "").strip()
        repo = (self.repo or "").strip()
        if not owner or not repo:
            raise ValueError(f"owner and repo are required (got owner={self.owner!r}, repo={self.repo!r})")
        object.__setattr__(self, "owner", owner)
        object.__setattr__(self, "repo", repo)
        object.__setattr__(self, "ref", (self.ref or "").strip() or DEFAULT_REF)
        object.__setattr__(self, "page", (self.page or "").strip() or DEFAULT_WIKI_PAGE)

    @classmethod
    def parse(cls, markup: str, kind: DocumentKind = DocumentKind.README) -> "FetchRequest":
        """Parse tag parameters: "owner, repo[, ref]" (README) or "owner, repo[, page]" (wiki)."""
        params = [p.strip() for p in str(markup or "").strip().split(",")]
        if len(params) < 2:
            raise ValueError(f"expected 'owner, repo[, {'page' if kind == DocumentKind.WIKI else 'ref'}]', got {markup!r}")
        third = params[2] if len(params) > 2 else ""
        if kind == DocumentKind.WIKI:
            return cls(owner=params[0], repo=params[1], page=third)
        return cls(owner=params[0], repo=params[1], ref=third)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class Success:
    payload: bytes
    download_url: Optional[str] = None
    kind: ResultKind = field(default=ResultKind.SUCCESS, init=False)


@dataclass(frozen=True)
class NotFound:
    status: int = 404
    kind: ResultKind = field(default=ResultKind.NOT_FOUND, init=False)


@dataclass(frozen=True)
class RateLimited:
    remaining: int
    limit: Optional[int] = None
    reset_at: Optional[int] = None  # epoch seconds
    kind: ResultKind = field(default=ResultKind.RATE_LIMITED, init=False)


@dataclass(frozen=True)
class TransientError:
    message: str
    status: Optional[int] = None
    kind: ResultKind = field(default=ResultKind.TRANSIENT_ERROR, init=False)


@dataclass(frozen=True)
class Timeout:
    message: str = ""
    kind: ResultKind = field(default=ResultKind.TIMEOUT, init=False)


FetchResult = Union[Success, NotFound, RateLimited, TransientError, Timeout]
