#!/usr/bin/env python3
"""Module entrypoint for `github_include`.

Usage:
  - `python3 -m github_include readme 'octocat, Hello-World'`
"""

from __future__ import annotations

from .cli import _cli


if __name__ == "__main__":
    raise SystemExit(_cli())
