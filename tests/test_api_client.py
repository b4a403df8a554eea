from __future__ import annotations

import http.client
import io
import json
import urllib.error

import pytest

from required_status_check.errors import FetchFailure
from required_status_check.github.api_client import GitHubClient, fetch_workflow_content
from required_status_check.model import WorkflowRef

REF = WorkflowRef(owner="octo", repo="hello", path=".github/workflows/pull request.yaml", ref="abc123")


class FakeResponse:
    def __init__(self, body, status=200):
        self.status = status
        self._body = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def urlopen(monkeypatch):
    calls = []

    def install(result):
        def fake(req, timeout=None):
            calls.append((req, timeout))
            if isinstance(result, Exception):
                raise result
            return result

        monkeypatch.setattr("urllib.request.urlopen", fake)
        return calls

    return install


def test_get_content_request(urlopen):
    calls = urlopen(FakeResponse({"content": "am9iczoge30K"}))
    client = GitHubClient("secret", api_url="https://ghe.example.com/api/v3/", timeout=5)

    assert fetch_workflow_content(client, REF) == "am9iczoge30K"

    req, timeout = calls[0]
    assert req.get_method() == "GET"
    assert req.full_url == (
        "https://ghe.example.com/api/v3/repos/octo/hello/contents/"
        ".github/workflows/pull%20request.yaml?ref=abc123"
    )
    assert req.get_header("Authorization") == "Bearer secret"
    assert req.get_header("Accept") == "application/vnd.github+json"
    assert timeout == 5


def test_no_token_no_authorization_header(urlopen):
    calls = urlopen(FakeResponse({"content": ""}))
    fetch_workflow_content(GitHubClient(""), REF)
    req, _ = calls[0]
    assert req.get_header("Authorization") is None
    assert req.full_url.startswith("https://api.github.com/repos/")


def test_directory_is_not_a_file(urlopen):
    urlopen(FakeResponse([{"name": "a.yaml", "type": "file"}]))
    with pytest.raises(FetchFailure, match=r"^workflow file is not a file: \(200\) ") as exc:
        fetch_workflow_content(GitHubClient("t"), REF)
    assert exc.value.status == 200


def test_symlink_without_content_is_not_a_file(urlopen):
    urlopen(FakeResponse({"type": "symlink", "target": "../ci.yaml"}))
    with pytest.raises(FetchFailure, match="workflow file is not a file"):
        fetch_workflow_content(GitHubClient("t"), REF)


def test_http_error(urlopen):
    urlopen(
        urllib.error.HTTPError(
            "https://api.github.com/x", 404, "Not Found", {}, io.BytesIO(b'{"message": "Not Found"}')
        )
    )
    with pytest.raises(FetchFailure, match="HTTP 404 Not Found") as exc:
        fetch_workflow_content(GitHubClient("t"), REF)
    assert exc.value.status == 404
    assert "Not Found" in str(exc.value)


def test_network_error(urlopen):
    urlopen(urllib.error.URLError("connection refused"))
    with pytest.raises(FetchFailure, match="network error: connection refused"):
        fetch_workflow_content(GitHubClient("t"), REF)


def test_timeout(urlopen):
    urlopen(TimeoutError("timed out"))
    with pytest.raises(FetchFailure, match="timed out"):
        fetch_workflow_content(GitHubClient("t", timeout=1), REF)


def test_invalid_json(urlopen):
    urlopen(FakeResponse(b"<html>"))
    with pytest.raises(FetchFailure, match="invalid JSON response"):
        fetch_workflow_content(GitHubClient("t"), REF)


def test_remote_disconnected(urlopen):
    urlopen(http.client.RemoteDisconnected("Remote end closed connection without response"))
    with pytest.raises(FetchFailure, match="network error: Remote end closed connection"):
        fetch_workflow_content(GitHubClient("t"), REF)


def test_connection_reset(urlopen):
    urlopen(ConnectionResetError(104, "Connection reset by peer"))
    with pytest.raises(FetchFailure, match="network error: .*Connection reset by peer"):
        fetch_workflow_content(GitHubClient("t"), REF)


def test_http_error_with_binary_body(urlopen):
    urlopen(urllib.error.HTTPError("https://api.github.com/x", 502, "Bad Gateway", {}, io.BytesIO(b"\xff\xfe")))
    with pytest.raises(FetchFailure, match="HTTP 502 Bad Gateway") as exc:
        fetch_workflow_content(GitHubClient("t"), REF)
    assert exc.value.status == 502
