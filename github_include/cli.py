"""
CLI wrapper for github_include.

Renders one include exactly the way a template would, which makes it easy to check
tokens, cache behavior and link rewriting without running a site build.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import replace
from typing import Optional, Sequence, Union

import argparse
import logging
import sys

from .cache_store import CacheStore, DiskCacheStore, MemoryCacheStore
from .common import IncludeSettings, load_site_config, resolve_token
from .fetcher import GitHubFetcher
from .tags import ReadmeTag, WikiTag
from .results import DocumentKind, FetchRequest, ResultKind

logger = logging.getLogger(__name__)


def _cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="github_include",
        description="Fetch a GitHub README or wiki page the way the template include does.",
        epilog="Examples:\n"
               "  %(prog)s readme 'octocat, Hello-World'\n"
               "  %(prog)s readme 'octocat, Hello-World, dev' --no-cache\n"
               "  %(prog)s wiki 'octocat, Hello-World, Getting-Started'  # prints the page Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("kind", choices=[k.value for k in DocumentKind], help="What to fetch.")
    parser.add_argument("markup", help="Tag parameters: 'owner, repo[, ref]' (readme) or 'owner, repo[, page]' (wiki).")
    parser.add_argument("--config", default="_config.yml", help="Site config YAML (default: _config.yml)")
    parser.add_argument("--cache-dir", default="", help="Override the cache directory.")
    parser.add_argument("--no-cache", action="store_true", help="Skip the disk cache (readme only).")
    parser.add_argument("--clear-cache", action="store_true", help="Delete all cached READMEs before fetching.")
    parser.add_argument("--locale", default="", help="Diagnostic language: en or zh (default: from config, else en).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging (requests, cache hits).")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s")

    site_config = load_site_config(Path(args.config))
    settings = IncludeSettings.from_site_config(site_config)
    overrides: dict = {}
    if args.cache_dir:
        overrides["cache_dir"] = Path(args.cache_dir).expanduser()
    if args.locale:
        overrides["locale"] = args.locale.strip().lower()
    if overrides:
        settings = replace(settings, **overrides)

    try:
        req = FetchRequest.parse(args.markup, DocumentKind(args.kind))
    except ValueError as e:
        parser.error(str(e))

    fetcher = GitHubFetcher(resolve_token(site_config), settings=settings)
    if not fetcher.token:
        logger.debug("No GitHub token found; using anonymous requests")

    disk_cache = DiskCacheStore(settings.cache_dir, ttl_s=settings.ttl_s)
    if args.clear_cache:
        n = disk_cache.clear()
        logger.info("Removed %d cached file(s) from %s", n, settings.cache_dir)
    cache: CacheStore = MemoryCacheStore(ttl_s=settings.ttl_s) if args.no_cache else disk_cache

    tag: Union[ReadmeTag, WikiTag]
    if args.kind == DocumentKind.WIKI.value:
        tag = WikiTag(req, fetcher=fetcher, converter=lambda text: text, settings=settings)
    else:
        tag = ReadmeTag(req, fetcher=fetcher, cache=cache, settings=settings)
    output = tag.render()

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")

    logger.debug(
        "REST calls=%d errors=%d time=%.2fs; cache hit=%d miss=%d write=%d",
        fetcher.stats.calls_total,
        fetcher.stats.errors_total,
        fetcher.stats.time_total_s,
        cache.stats.hit,
        cache.stats.miss,
        cache.stats.write,
    )
    return 0 if tag.last_kind == ResultKind.SUCCESS else 1
