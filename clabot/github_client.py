"""
GitHub REST client for the CLA robot.

Implements the handful of pull request operations the robot needs: label
and comment mutation plus commit and comment listing.
"""

import logging
import os
from typing import Protocol
from urllib.parse import quote

import requests

from clabot.errors import GitHubAPIError
from clabot.models import Comment, CommitRecord, PRInfo, PullRequest

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"


class PRClient(Protocol):
    """Pull request operations consumed by the evaluator and reconciler."""

    def add_label(self, pr: PRInfo, label: str) -> None: ...

    def remove_label(self, pr: PRInfo, label: str) -> None: ...

    def create_comment(self, pr: PRInfo, comment: str) -> None: ...

    def delete_comment(self, org: str, repo: str, comment_id: int) -> None: ...

    def list_commits(self, pr: PRInfo) -> list[CommitRecord]: ...

    def list_comments(self, pr: PRInfo) -> list[Comment]: ...


class GitHubClient:
    """Authenticated GitHub REST client."""

    DEFAULT_TIMEOUT = 30
    PER_PAGE = 100

    def __init__(
        self,
        token: str,
        api_url: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        """
        Args:
            token: GitHub token with pull request write access
            api_url: REST base URL (defaults to $GITHUB_API_URL or api.github.com)
            timeout: Request timeout in seconds
            session: Optional session, mostly for tests
        """
        self.api_url = (api_url or os.environ.get("GITHUB_API_URL") or GITHUB_API).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github+json",
            }
        )

    def _url(self, endpoint: str) -> str:
        return endpoint if endpoint.startswith("http") else f"{self.api_url}/{endpoint}"

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = self._url(endpoint)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise GitHubAPIError(method, url, None, str(e)) from e

        if not response.ok:
            raise GitHubAPIError(method, url, response.status_code, response.text)
        return response

    def _get_all(self, endpoint: str) -> list[dict]:
        """GET every page of a listing endpoint."""
        items: list[dict] = []
        url: str | None = endpoint
        params: dict | None = {"per_page": self.PER_PAGE}

        while url:
            response = self._request("GET", url, params=params)
            items.extend(response.json())
            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None

        return items

    def _issue_path(self, pr: PRInfo) -> str:
        return f"repos/{pr.org}/{pr.repo}/issues/{pr.number}"

    def get_pull_request(self, pr: PRInfo) -> PullRequest:
        response = self._request("GET", f"repos/{pr.org}/{pr.repo}/pulls/{pr.number}")
        return PullRequest.from_api(pr.org, pr.repo, response.json())

    def add_label(self, pr: PRInfo, label: str) -> None:
        self._request("POST", f"{self._issue_path(pr)}/labels", json={"labels": [label]})

    def remove_label(self, pr: PRInfo, label: str) -> None:
        try:
            self._request("DELETE", f"{self._issue_path(pr)}/labels/{quote(label, safe='')}")
        except GitHubAPIError as e:
            # Already gone
            if e.status_code != 404:
                raise

    def create_comment(self, pr: PRInfo, comment: str) -> None:
        self._request("POST", f"{self._issue_path(pr)}/comments", json={"body": comment})

    def delete_comment(self, org: str, repo: str, comment_id: int) -> None:
        self._request("DELETE", f"repos/{org}/{repo}/issues/comments/{comment_id}")

    def list_commits(self, pr: PRInfo) -> list[CommitRecord]:
        data = self._get_all(f"repos/{pr.org}/{pr.repo}/pulls/{pr.number}/commits")
        return [CommitRecord.from_api(item) for item in data]

    def list_comments(self, pr: PRInfo) -> list[Comment]:
        data = self._get_all(f"{self._issue_path(pr)}/comments")
        return [Comment(id=item["id"], body=item.get("body") or "") for item in data]
