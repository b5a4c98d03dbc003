# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Jinja2 integration.

    env = Environment(loader=FileSystemLoader("templates"))
    register(env, load_site_config(Path("_config.yml")))

    {{ github_readme("octocat, Hello-World, main") }}
    {{ github_wiki("octocat, Hello-World, Getting-Started") }}

The wiki converter defaults to the environment's `markdown` filter when the site registers one.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from jinja2 import Environment
from markupsafe import Markup

from .cache_store import CacheStore, DiskCacheStore
from .common import IncludeSettings, resolve_token
from .fetcher import GitHubFetcher
from .tags import MarkdownConverter, render_readme, render_wiki

logger = logging.getLogger(__name__)


def _passthrough(text: str) -> str:
    return text


def register(
    env: Environment,
    site_config: Optional[Mapping[str, Any]] = None,
    *,
    converter: Optional[MarkdownConverter] = None,
    fetcher: Optional[GitHubFetcher] = None,
    cache: Optional[CacheStore] = None,
) -> Environment:
    """Install `github_readme()` and `github_wiki()` template globals on `env`."""
    settings = fetcher.settings if fetcher is not None else IncludeSettings.from_site_config(site_config)
    if fetcher is None:
        fetcher = GitHubFetcher(resolve_token(site_config), settings=settings)
    if cache is None:
        cache = DiskCacheStore(settings.cache_dir, ttl_s=settings.ttl_s)

    if converter is None:
        converter = env.filters.get("markdown")
    if converter is None:
        logger.warning("No markdown filter registered; github_wiki() will emit Markdown unchanged")
        converter = _passthrough

    def github_readme(markup: str) -> str:
        return render_readme(markup, fetcher=fetcher, cache=cache, settings=settings)

    def github_wiki(markup: str) -> Markup:
        return Markup(render_wiki(markup, fetcher=fetcher, converter=converter, settings=settings))

    env.globals["github_readme"] = github_readme
    env.globals["github_wiki"] = github_wiki
    return env
