"""Fake requests session / response objects for tests; no test touches the network."""

import base64
import json
from typing import Any, Dict, List, Optional

from requests.structures import CaseInsensitiveDict


class FakeResponse:
    def __init__(self, status_code: int = 200, *, body: Any = b"", headers: Optional[Dict[str, str]] = None, reason: str = ""):
        self.status_code = status_code
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.headers = CaseInsensitiveDict(headers or {})
        self.reason = reason

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        # json.JSONDecodeError is a ValueError, like requests' own
        return json.loads(self.text)


class FakeSession:
    """Returns queued responses (or raises queued exceptions) and records every call."""

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"unexpected request: {url}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


def readme_envelope(markdown: bytes, download_url: str = "https://raw.githubusercontent.com/owner/repo/main/README.md") -> Dict[str, Any]:
    encoded = base64.b64encode(markdown).decode("ascii")
    return {
        "name": "README.md",
        "path": "README.md",
        "encoding": "base64",
        # GitHub wraps the base64 payload at 60 columns
        "content": "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)) + "\n",
        "download_url": download_url,
    }
