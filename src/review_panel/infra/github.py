from __future__ import annotations

import base64
from typing import Any
from urllib.parse import quote

import requests

from ..core.domain.exceptions import (
    ConfigError,
    EmptyRepositoryError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
)
from ..core.domain.models import FileChange, PullRequestInfo, RepositoryInfo
from ..core.ports import LoggerPort


TEST_DIRS = {"test", "tests", "__tests__", "spec", "specs", "e2e"}
TEST_FILE_PATTERNS = (".test.", ".spec.", "_test.", ".test-")


class GitHubClient:
    """Minimal GitHub REST v3 client for review content and commit fingerprints.

    HTTP failures are translated into typed review errors; ``describe`` is used
    to word the not-found message for the resource that was asked for.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._logger = logger
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "review-panel",
        })
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, *, describe: str, owner: str, repo: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_url}{path}"
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"GitHub request failed: {e}") from e

        if resp.status_code == 404:
            raise NotFoundError(f"{describe} not found")
        if resp.status_code == 403:
            raise ForbiddenError(f"Access denied to {owner}/{repo}. Repository may be private.")
        if resp.status_code == 401:
            raise ConfigError("GitHub authentication failed. Check GITHUB_TOKEN.", code="GITHUB_AUTH_ERROR")
        if resp.status_code == 409 or (resp.status_code >= 400 and "empty" in resp.text.lower()):
            raise EmptyRepositoryError(f"Repository {owner}/{repo} is empty")
        if resp.status_code >= 400:
            raise UpstreamError(f"GitHub API error {resp.status_code} for {describe}")

        return resp.json()

    def fetch_pull_request(self, owner: str, repo: str, number: int) -> PullRequestInfo:
        data = self._get(
            f"/repos/{owner}/{repo}/pulls/{number}",
            describe=f"Pull request #{number} in {owner}/{repo}",
            owner=owner,
            repo=repo,
        )
        return PullRequestInfo(
            number=data["number"],
            title=data.get("title") or "",
            author=(data.get("user") or {}).get("login") or "unknown",
            additions=data.get("additions") or 0,
            deletions=data.get("deletions") or 0,
            changed_files=data.get("changed_files") or 0,
            commits=data.get("commits") or 0,
            body=data.get("body") or None,
            is_draft=bool(data.get("draft")),
        )

    def fetch_pull_request_files(self, owner: str, repo: str, number: int) -> list[FileChange]:
        data = self._get(
            f"/repos/{owner}/{repo}/pulls/{number}/files",
            describe=f"Files of pull request #{number} in {owner}/{repo}",
            owner=owner,
            repo=repo,
            params={"per_page": 100},
        )
        return [
            FileChange(
                filename=f["filename"],
                status=f.get("status", "modified"),
                additions=f.get("additions", 0),
                deletions=f.get("deletions", 0),
                patch=f.get("patch"),
            )
            for f in data
        ]

    def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        data = self._get(
            f"/repos/{owner}/{repo}",
            describe=f"Repository {owner}/{repo}",
            owner=owner,
            repo=repo,
        )
        return RepositoryInfo(
            name=data["name"],
            owner=(data.get("owner") or {}).get("login") or owner,
            description=data.get("description") or None,
            language=data.get("language") or None,
            stars=data.get("stargazers_count") or 0,
            has_tests=self._detect_tests(owner, repo),
            readme_content=self._fetch_readme(owner, repo),
        )

    def _fetch_readme(self, owner: str, repo: str) -> str | None:
        try:
            data = self._get(
                f"/repos/{owner}/{repo}/readme",
                describe=f"README of {owner}/{repo}",
                owner=owner,
                repo=repo,
            )
        except (NotFoundError, EmptyRepositoryError):
            return None
        content = data.get("content")
        if not content:
            return None
        return base64.b64decode(content).decode("utf-8", errors="replace")

    def _detect_tests(self, owner: str, repo: str) -> bool:
        try:
            contents = self._get(
                f"/repos/{owner}/{repo}/contents/",
                describe=f"Contents of {owner}/{repo}",
                owner=owner,
                repo=repo,
            )
        except (NotFoundError, EmptyRepositoryError):
            return False
        if not isinstance(contents, list):
            return False

        if any(item.get("type") == "dir" and item.get("name", "").lower() in TEST_DIRS for item in contents):
            return True
        return any(
            item.get("type") == "file" and any(p in item.get("name", "") for p in TEST_FILE_PATTERNS)
            for item in contents
        )

    def fetch_pr_head_sha(self, owner: str, repo: str, number: int) -> str:
        data = self._get(
            f"/repos/{owner}/{repo}/pulls/{number}",
            describe=f"Pull request #{number} in {owner}/{repo}",
            owner=owner,
            repo=repo,
        )
        return data["head"]["sha"]

    def fetch_default_branch_sha(self, owner: str, repo: str) -> str:
        data = self._get(
            f"/repos/{owner}/{repo}",
            describe=f"Repository {owner}/{repo}",
            owner=owner,
            repo=repo,
        )
        return self.fetch_branch_sha(owner, repo, data["default_branch"])

    def fetch_commit_sha(self, owner: str, repo: str, sha: str) -> str:
        data = self._get(
            f"/repos/{owner}/{repo}/commits/{quote(sha, safe='')}",
            describe=f"Commit {sha} in {owner}/{repo}",
            owner=owner,
            repo=repo,
        )
        return data["sha"]

    def fetch_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        data = self._get(
            f"/repos/{owner}/{repo}/git/ref/heads/{quote(branch, safe='/')}",
            describe=f"Branch {branch} in {owner}/{repo}",
            owner=owner,
            repo=repo,
        )
        self._logger.debug("branch_resolved", owner=owner, repo=repo, branch=branch)
        return data["object"]["sha"]
