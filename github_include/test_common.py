"""
Pytest tests for configuration helpers (token resolution, settings, site config loading).
"""

from pathlib import Path

from github_include.common import (
    DEFAULT_CACHE_TTL_S,
    IncludeSettings,
    github_include_cache_dir,
    load_site_config,
    resolve_token,
)


def test_resolve_token_env_wins_over_config():
    cfg = {"github": {"token": "from-config"}}
    assert resolve_token(cfg, {"GITHUB_TOKEN": "from-env"}) == "from-env"


def test_resolve_token_falls_back_to_config():
    cfg = {"github": {"token": " from-config "}}
    assert resolve_token(cfg, {"GITHUB_TOKEN": "   "}) == "from-config"


def test_resolve_token_anonymous():
    assert resolve_token({}, {}) is None
    assert resolve_token({"github": "not-a-mapping"}, {}) is None
    assert resolve_token(None, {}) is None


def test_cache_dir_env_override(tmp_path):
    assert github_include_cache_dir({"GITHUB_INCLUDE_CACHE_DIR": str(tmp_path)}) == tmp_path
    assert github_include_cache_dir({}) == Path.home() / ".cache" / "github-include"


def test_settings_defaults():
    s = IncludeSettings.from_site_config({}, {})
    assert s.ttl_s == DEFAULT_CACHE_TTL_S == 3600
    assert s.timeout == (30.0, 30.0)
    assert s.locale == "en"
    assert s.api_url == "https://api.github.com"


def test_settings_from_site_config(tmp_path):
    cfg = {
        "github_include": {
            "cache_dir": str(tmp_path / "c"),
            "ttl": 120,
            "read_timeout": 5,
            "locale": "ZH",
            "api_url": "https://ghe.example.com/api/v3/",
        }
    }
    s = IncludeSettings.from_site_config(cfg, {})
    assert s.cache_dir == tmp_path / "c"
    assert s.ttl_s == 120
    assert s.timeout == (30.0, 5.0)
    assert s.locale == "zh"
    assert s.api_url == "https://ghe.example.com/api/v3"


def test_settings_bad_numbers_use_defaults():
    s = IncludeSettings.from_site_config({"github_include": {"ttl": "soon", "connect_timeout": -1}}, {})
    assert s.ttl_s == 3600
    assert s.connect_timeout_s == 30.0


def test_load_site_config(tmp_path):
    p = tmp_path / "_config.yml"
    p.write_text("github:\n  token: abc\ngithub_include:\n  ttl: 60\n", encoding="utf-8")
    cfg = load_site_config(p)
    assert cfg["github"]["token"] == "abc"
    assert cfg["github_include"]["ttl"] == 60


def test_load_site_config_missing_or_invalid(tmp_path):
    assert load_site_config(tmp_path / "missing.yml") == {}
    bad = tmp_path / "bad.yml"
    bad.write_text("github: [unclosed\n", encoding="utf-8")
    assert load_site_config(bad) == {}
    scalar = tmp_path / "scalar.yml"
    scalar.write_text("just a string\n", encoding="utf-8")
    assert load_site_config(scalar) == {}
    assert load_site_config(None) == {}
