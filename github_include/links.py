# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Relative-link rewriting for README Markdown pulled out of its repository.

Once a README is rendered on another site, `![logo](./docs/logo.png)` and
`[guide](docs/guide.md)` no longer resolve. We fix what we can:

- relative images  -> absolute URLs under the README's raw-content directory
- relative `.md`   -> plain text pointing at the repository page
- everything else  -> unchanged

One left-to-right `re.sub` pass over bracket syntax only; rewritten output is never rescanned.
"""

from __future__ import annotations

import re
from typing import Optional

from .common import GITHUB_RAW_URL, GITHUB_WEB_URL

# (!?)[label](path "optional title")
# Labels exclude brackets so the inner image of `[![badge](x.svg)](url)` matches by itself.
# The outer link of such a badge is never matched: `[![x](a.png)](docs/a.md)` keeps its
# relative `.md` target (only the image is rewritten).
MARKDOWN_LINK_REGEX = re.compile(
    r'(?P<bang>!?)\[(?P<label>[^\[\]]*)\]\((?P<path>[^)\s]+)(?P<title>\s+"[^"]*")?\)'
)


def _is_absolute(path: str) -> bool:
    return path.startswith("http") or path.startswith("/")


def _is_markdown_doc(path: str) -> bool:
    return path.split("#", 1)[0].lower().endswith(".md")


def repo_pointer_text(label: str, owner: str, repo: str, *, web_url: str = GITHUB_WEB_URL) -> str:
    """Inline text that replaces a cross-document link."""
    url = f"{web_url.rstrip('/')}/{owner}/{repo}"
    if label.strip():
        return f"{label} (see {url})"
    return f"see {url}"


def rewrite(text: str, base_url: str, owner: str, repo: str, *, web_url: str = GITHUB_WEB_URL) -> str:
    """Rewrite relative Markdown image/link references in `text`.

    Example:
        rewrite("![a](./img.png)", "https://x/y", "o", "r")  -> "![a](https://x/y/img.png)"
        rewrite("[doc](other.md)", ...)                       -> "doc (see https://github.com/o/r)"
    """
    if not text:
        return text or ""
    base = (base_url or "").rstrip("/")

    def _sub(m: "re.Match[str]") -> str:
        label = m.group("label")
        path = m.group("path")
        title = m.group("title") or ""

        if m.group("bang"):
            if _is_absolute(path):
                return m.group(0)
            if path.startswith("./"):
                path = path[2:]
            return f"![{label}]({base}/{path}{title})"

        if _is_absolute(path) or path.startswith("#"):
            return m.group(0)
        if _is_markdown_doc(path):
            return repo_pointer_text(label, owner, repo, web_url=web_url)
        return m.group(0)

    return MARKDOWN_LINK_REGEX.sub(_sub, text)


def base_for_download_url(
    download_url: Optional[str],
    owner: str,
    repo: str,
    ref: str,
    *,
    raw_url: str = GITHUB_RAW_URL,
) -> str:
    """Directory URL that relative README paths resolve against.

    `https://raw.githubusercontent.com/o/r/main/README.md` -> `https://raw.githubusercontent.com/o/r/main`.
    Without a usable download_url, fall back to the repository root at `ref`.
    """
    url = (download_url or "").strip()
    if url.startswith("http") and "/" in url.split("://", 1)[-1]:
        return url.rsplit("/", 1)[0]
    return f"{raw_url.rstrip('/')}/{owner}/{repo}/{ref}"
