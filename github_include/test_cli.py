"""
Pytest tests for the `python -m github_include` CLI.
"""

from github_include import cli
from github_include.http_fakes import FakeResponse, FakeSession, readme_envelope


def _patch_session(monkeypatch, *responses):
    session = FakeSession(*responses)
    monkeypatch.setattr("github_include.fetcher.requests.Session", lambda: session)
    return session


def test_cli_readme_prints_and_caches(monkeypatch, tmp_path, capsys):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    session = _patch_session(monkeypatch, FakeResponse(200, body=readme_envelope(b"# Hi")))
    args = ["readme", "owner, repo", "--config", str(tmp_path / "none.yml"), "--cache-dir", str(tmp_path / "c")]

    assert cli._cli(args) == 0
    assert "# Hi" in capsys.readouterr().out
    assert (tmp_path / "c" / "owner_repo_main.md").exists()

    # Second run is served from the disk cache.
    assert cli._cli(args) == 0
    assert "# Hi" in capsys.readouterr().out
    assert len(session.calls) == 1


def test_cli_readme_diagnostic_exit_code(monkeypatch, tmp_path, capsys):
    _patch_session(monkeypatch, FakeResponse(404))
    rc = cli._cli(["readme", "owner, repo", "--config", str(tmp_path / "none.yml"), "--no-cache"])
    assert rc == 1
    assert "owner/repo" in capsys.readouterr().out


def test_cli_wiki_prints_markdown(monkeypatch, tmp_path, capsys):
    _patch_session(monkeypatch, FakeResponse(200, body=b"# Wiki home"))
    rc = cli._cli(["wiki", "owner, repo", "--config", str(tmp_path / "none.yml"), "--locale", "zh"])
    assert rc == 0
    assert capsys.readouterr().out == "# Wiki home\n"
