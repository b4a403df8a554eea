# github/api_client.py
from __future__ import annotations

import http.client
import json
import socket
import urllib.error
import urllib.request
from typing import Any, Optional, Tuple
from urllib.parse import quote, urlencode

from required_status_check.errors import FetchFailure
from required_status_check.model import WorkflowRef


DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubClient:
    """Minimal GitHub REST client: the one endpoint the status check reads."""

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL, timeout: float = 30.0):
        """
        Initialize API client.

        Args:
            token: Token sent as a bearer credential (may be empty for public repos)
            api_url: Base URL of the REST API (GITHUB_API_URL on GHES)
            timeout: Socket timeout in seconds for the request
        """
        self.token = token
        self.base_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, query: Optional[dict] = None) -> Tuple[int, Any]:
        """
        Make an HTTP request to the API.

        Returns:
            (status code, parsed JSON body)

        Raises:
            FetchFailure: If the request fails or the body is not JSON
        """
        url = self.base_url + path
        if query:
            url += "?" + urlencode(query)

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "required-status-check",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        req = urllib.request.Request(url, headers=headers, method=method)

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                status = response.status
                body = response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
            raise FetchFailure(
                f"failed to get the workflow file: HTTP {e.code} {e.reason}. {error_body}".rstrip(),
                status=e.code,
            ) from e
        except urllib.error.URLError as e:
            raise FetchFailure(f"failed to get the workflow file: network error: {e.reason}") from e
        except (socket.timeout, TimeoutError) as e:
            raise FetchFailure(f"failed to get the workflow file: timed out after {self.timeout}s") from e
        except (http.client.HTTPException, OSError) as e:
            raise FetchFailure(f"failed to get the workflow file: network error: {e}") from e

        try:
            return status, json.loads(body)
        except json.JSONDecodeError as e:
            raise FetchFailure(
                f"failed to get the workflow file: invalid JSON response: {e}", status=status
            ) from e

    def get_content(self, ref: WorkflowRef) -> Tuple[int, Any]:
        """GET /repos/{owner}/{repo}/contents/{path}?ref={ref}"""
        path = "/repos/{}/{}/contents/{}".format(
            quote(ref.owner, safe=""),
            quote(ref.repo, safe=""),
            quote(ref.path, safe="/"),
        )
        return self._request("GET", path, query={"ref": ref.ref})


def fetch_workflow_content(client: GitHubClient, ref: WorkflowRef) -> str:
    """
    Return the base64 `content` of the workflow file.

    Directories come back as a JSON list and symlinks/submodules without
    `content`; both are reported as "not a file".
    """
    status, data = client.get_content(ref)
    if not isinstance(data, dict) or not isinstance(data.get("content"), str):
        raise FetchFailure(
            f"workflow file is not a file: ({status}) {json.dumps(data)}",
            status=status,
        )
    return data["content"]
