# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared configuration helpers for github_include.

Settings come from the `github_include:` section of the site config (Jekyll-style
`_config.yml`), with a couple of environment overrides:

    github:
      token: ghp_...            # used only when GITHUB_TOKEN is unset
    github_include:
      cache_dir: .cache/github  # else $GITHUB_INCLUDE_CACHE_DIR, else ~/.cache/github-include
      ttl: 3600
      connect_timeout: 30
      read_timeout: 30
      locale: en                # en | zh
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

# ======================================================================================
# Defaults
# ======================================================================================
DEFAULT_CACHE_TTL_S: int = 3600
# ^ Freshness window for a cached README. Entries older than this are treated as absent.
DEFAULT_CONNECT_TIMEOUT_S: float = 30.0
DEFAULT_READ_TIMEOUT_S: float = 30.0
DEFAULT_LOCALE: str = "en"

GITHUB_API_URL = "https://api.github.com"
GITHUB_RAW_URL = "https://raw.githubusercontent.com"
GITHUB_WEB_URL = "https://github.com"

TOKEN_ENV_VAR = "GITHUB_TOKEN"
CACHE_DIR_ENV_VAR = "GITHUB_INCLUDE_CACHE_DIR"
SETTINGS_SECTION = "github_include"

USER_AGENT = f"github-include/{__version__}"


def github_include_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the cache directory for github_include.

    Resolution order:
    - GITHUB_INCLUDE_CACHE_DIR (explicit override)
    - ~/.cache/github-include
    """
    env = os.environ if environ is None else environ
    override = env.get(CACHE_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()

    return Path.home() / ".cache" / "github-include"


def _nested_get(config: Optional[Mapping[str, Any]], *keys: str) -> Any:
    cur: Any = config
    for k in keys:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(k)
    return cur


def resolve_token(
    site_config: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Resolve the GitHub token (first non-blank value wins).

    1. GITHUB_TOKEN environment variable
    2. site config `github.token`
    3. None (anonymous; subject to the public 60 req/h limit)
    """
    env = os.environ if environ is None else environ
    tok = (env.get(TOKEN_ENV_VAR) or "").strip()
    if tok:
        return tok
    cfg_tok = _nested_get(site_config, "github", "token")
    if isinstance(cfg_tok, str) and cfg_tok.strip():
        return cfg_tok.strip()
    return None


def load_site_config(path: Optional[Path]) -> Dict[str, Any]:
    """Load a YAML site config. Missing or unparsable files yield {}."""
    if path is None:
        return {}
    p = Path(path).expanduser()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug("Site config not found: %s", p)
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read site config %s: %s", p, e)
        return {}
    return data if isinstance(data, dict) else {}


def _as_float(x: Any, default: float) -> float:
    try:
        v = float(x)
    except (ValueError, TypeError):
        return default
    return v if v > 0 else default


@dataclass(frozen=True)
class IncludeSettings:
    """Resolved settings shared by the fetcher, the cache store and the tags."""

    cache_dir: Path
    ttl_s: int = DEFAULT_CACHE_TTL_S
    connect_timeout_s: float = DEFAULT_CONNECT_TIMEOUT_S
    read_timeout_s: float = DEFAULT_READ_TIMEOUT_S
    locale: str = DEFAULT_LOCALE
    api_url: str = GITHUB_API_URL
    raw_url: str = GITHUB_RAW_URL
    web_url: str = GITHUB_WEB_URL
    user_agent: str = USER_AGENT

    @property
    def timeout(self) -> Tuple[float, float]:
        """(connect, read) tuple as accepted by requests."""
        return (self.connect_timeout_s, self.read_timeout_s)

    @classmethod
    def from_site_config(
        cls,
        site_config: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "IncludeSettings":
        section = _nested_get(site_config, SETTINGS_SECTION)
        if not isinstance(section, Mapping):
            section = {}

        cache_dir_cfg = section.get("cache_dir")
        if isinstance(cache_dir_cfg, str) and cache_dir_cfg.strip():
            cache_dir = Path(cache_dir_cfg.strip()).expanduser()
        else:
            cache_dir = github_include_cache_dir(environ)

        locale = str(section.get("locale") or DEFAULT_LOCALE).strip().lower()

        return cls(
            cache_dir=cache_dir,
            ttl_s=int(_as_float(section.get("ttl"), DEFAULT_CACHE_TTL_S)),
            connect_timeout_s=_as_float(section.get("connect_timeout"), DEFAULT_CONNECT_TIMEOUT_S),
            read_timeout_s=_as_float(section.get("read_timeout"), DEFAULT_READ_TIMEOUT_S),
            locale=locale,
            api_url=str(section.get("api_url") or GITHUB_API_URL).rstrip("/"),
            raw_url=str(section.get("raw_url") or GITHUB_RAW_URL).rstrip("/"),
            web_url=str(section.get("web_url") or GITHUB_WEB_URL).rstrip("/"),
        )
