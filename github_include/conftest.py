"""Shared fixtures: settings under tmp_path and a fetcher wired to a FakeSession."""

from typing import Any, Optional

import pytest

from github_include.common import IncludeSettings
from github_include.fetcher import GitHubFetcher
from github_include.http_fakes import FakeSession


@pytest.fixture
def settings(tmp_path) -> IncludeSettings:
    return IncludeSettings(cache_dir=tmp_path / "cache")


@pytest.fixture
def make_fetcher(settings):
    def _make(*responses: Any, token: Optional[str] = None):
        session = FakeSession(*responses)
        return GitHubFetcher(token, settings=settings, session=session), session
    return _make
