"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

It is used by the `archive` fetch strategy, which downloads a branch tarball
instead of running `git clone`.
"""

from __future__ import annotations

import re
from pathlib import Path

import requests

_GITHUB_URL_RE = re.compile(
    r"^(?:https?://(?:[^@/]+@)?github\.com/|git@github\.com:|ssh://git@github\.com/)"
    r"(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?/?$"
)


class GitHubError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def parse_github_repo(url: str) -> tuple[str, str]:
    """
    Return (owner, name) for a GitHub repository URL.

    Accepts https, ssh and scp-style (`git@github.com:owner/name.git`) forms.
    """
    m = _GITHUB_URL_RE.match(url.strip())
    if not m:
        raise GitHubError(f"Not a GitHub repository URL: {url}")
    return m.group("owner"), m.group("name")


class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = "https://api.github.com") -> None:
        self._token = (token or "").strip()
        self._api_base = api_base.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "scaffold",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def download_tarball(self, owner: str, name: str, ref: str, destination: str | Path) -> Path:
        """
        Download the gzipped tarball of `owner/name` at `ref` into `destination`.

        GitHub answers with a redirect to codeload; requests follows it. The
        archive contains a single top-level `<owner>-<name>-<sha>/` directory.
        """
        path = f"/repos/{owner}/{name}/tarball/{ref}"
        url = f"{self._api_base}{path}"
        dest = Path(destination)
        try:
            with requests.get(url, headers=self._headers(), stream=True, timeout=30) as r:
                if r.status_code >= 400:
                    try:
                        payload = r.json()
                    except ValueError:
                        payload = {"message": r.text}
                    message = payload.get("message", payload) if isinstance(payload, dict) else payload
                    raise GitHubError(f"GitHub API error {r.status_code} GET {path}: {message}", status_code=r.status_code)
                with dest.open("wb") as fh:
                    for chunk in r.iter_content(chunk_size=64 * 1024):
                        if chunk:
                            fh.write(chunk)
        except requests.RequestException as e:
            raise GitHubError(f"Could not download {url}: {e}") from e
        return dest
