"""
GitHub README / wiki includes for static site templates.

This package contains the implementation for:
- fetching a repository README (REST API) or wiki page (raw content host)
- repairing the text encoding of what comes back
- rewriting relative image/document links so they survive outside GitHub
- a short-lived on-disk cache so page builds don't exhaust the rate limit

Public API is re-exported from:
- `github_include.tags` for the README/wiki include flows
- `github_include.jinja` for Jinja2 template globals
- `github_include.cache_store`, `.fetcher`, `.links`, `.encoding` for the building blocks
"""

from .cache_store import (  # noqa: F401
    CacheStore,
    DiskCacheStore,
    MemoryCacheStore,
    derive_key,
)
from .common import (  # noqa: F401
    IncludeSettings,
    __version__,
    load_site_config,
    resolve_token,
)
from .encoding import normalize  # noqa: F401
from .fetcher import GitHubFetcher  # noqa: F401
from .links import rewrite  # noqa: F401
from .tags import ReadmeTag, WikiTag, render_readme, render_wiki  # noqa: F401
from .results import (  # noqa: F401
    DocumentKind,
    FetchRequest,
    NotFound,
    RateLimited,
    ResultKind,
    Success,
    Timeout,
    TransientError,
)

__all__ = [
    "CacheStore",
    "DiskCacheStore",
    "MemoryCacheStore",
    "derive_key",
    "IncludeSettings",
    "load_site_config",
    "resolve_token",
    "normalize",
    "GitHubFetcher",
    "rewrite",
    "ReadmeTag",
    "WikiTag",
    "render_readme",
    "render_wiki",
    "DocumentKind",
    "FetchRequest",
    "NotFound",
    "RateLimited",
    "ResultKind",
    "Success",
    "Timeout",
    "TransientError",
]
