"""Shared fakes implementing the core ports."""
from __future__ import annotations

import json

from review_panel.core.domain.exceptions import NotFoundError
from review_panel.core.domain.judges import JUDGES
from review_panel.core.domain.models import FileChange, PullRequestInfo, RepositoryInfo


class FakeLogger:
    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def _log(self, level, message, kwargs):
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs) -> None:
        self._log("debug", message, kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log("info", message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log("warning", message, kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._log("error", message, kwargs)

    def exception(self, message: str, **kwargs) -> None:
        self._log("exception", message, kwargs)

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]

    def find(self, message: str) -> dict | None:
        for _, m, kwargs in self.records:
            if m == message:
                return kwargs
        return None


class FakeSource:
    """In-memory GitHub: one PR and one repository per owner/repo."""

    def __init__(self, *, head_sha: str = "a" * 40, files: list[FileChange] | None = None):
        self.head_sha = head_sha
        self.files = files if files is not None else [
            FileChange(filename="src/app.py", status="modified", additions=3, deletions=1, patch="@@ -1 +1 @@\n-a\n+b"),
        ]
        self.calls: list[tuple] = []
        self.missing: set[str] = set()

    def _check(self, owner, repo):
        if f"{owner}/{repo}" in self.missing:
            raise NotFoundError(f"Repository {owner}/{repo} not found")

    def fetch_pull_request(self, owner, repo, number):
        self.calls.append(("pull_request", owner, repo, number))
        self._check(owner, repo)
        return PullRequestInfo(
            number=number,
            title="Add feature",
            author="octocat",
            additions=3,
            deletions=1,
            changed_files=len(self.files),
            commits=2,
            body="Implements the feature.",
            is_draft=False,
        )

    def fetch_pull_request_files(self, owner, repo, number):
        self.calls.append(("files", owner, repo, number))
        return list(self.files)

    def fetch_repository(self, owner, repo):
        self.calls.append(("repository", owner, repo))
        self._check(owner, repo)
        return RepositoryInfo(
            name=repo,
            owner=owner,
            description="A test repository",
            language="Python",
            stars=42,
            has_tests=True,
            readme_content="# Hello",
        )

    def fetch_pr_head_sha(self, owner, repo, number):
        self.calls.append(("pr_head_sha", owner, repo, number))
        self._check(owner, repo)
        return self.head_sha

    def fetch_default_branch_sha(self, owner, repo):
        self.calls.append(("default_branch_sha", owner, repo))
        self._check(owner, repo)
        return self.head_sha

    def fetch_commit_sha(self, owner, repo, sha):
        self.calls.append(("commit_sha", owner, repo, sha))
        return sha.ljust(40, "0")

    def fetch_branch_sha(self, owner, repo, branch):
        self.calls.append(("branch_sha", owner, repo, branch))
        return self.head_sha


def judge_payload(judge_id: str, score: int = 80) -> dict:
    info = JUDGES[judge_id]
    return {
        "id": judge_id,
        "name": info.name,
        "icon": info.icon,
        "score": score,
        "verdict": "Good",
        "findings": [
            {"severity": "info", "title": "Looks fine", "message": "No blocking issues."},
            {"severity": "warning", "title": "Minor nit", "message": "Consider renaming.", "location": "src/app.py:1"},
        ],
    }


def review_payload(scores: dict[str, int], *, overall_score: int | None = None) -> dict:
    judges = [judge_payload(j, s) for j, s in scores.items()]
    return {
        "overall": {
            "score": overall_score if overall_score is not None else 0,
            "grade": "?",
            "verdict": "Solid work",
            "summary": "Overall the change is reasonable.",
        },
        "judges": judges,
        "fullReport": {
            "summary": "Detailed summary.",
            "fileBreakdown": [{"file": "src/app.py", "score": 85, "summary": "Fine", "issues": []}],
            "recommendations": [{"priority": "low", "title": "Docs", "description": "Add docs."}],
            "codeSnippets": [],
        },
    }


class FakeLLM:
    def __init__(self, response: str | dict | None = None, *, has_credentials: bool = True):
        if isinstance(response, dict):
            response = json.dumps(response)
        self.response = response
        self._has_credentials = has_credentials
        self.calls: list[dict] = []

    @property
    def has_credentials(self) -> bool:
        return self._has_credentials

    def complete(self, *, system_prompt: str, user_prompt: str, model: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt, "model": model})
        if self.response is not None:
            return self.response
        # Answer for exactly the judges named in the prompt's panel line
        requested = [j for j in JUDGES if f"(id: \"{j}\")" in user_prompt]
        return json.dumps(review_payload({j: 80 for j in requested}))


def make_config(home, **sections):
    """AppConfig rooted at ``home`` with console logging off."""
    from review_panel.app.config import AppConfig, DirectoryConfig, LLMConfig, LoggingConfig

    sections.setdefault("llm", LLMConfig(api_key="sk-test"))
    sections.setdefault("logging", LoggingConfig(console_output=False))
    return AppConfig(directories=DirectoryConfig(home=home), **sections)


def container_factory(source, llm):
    """Zero-argument Container factory with GitHub and the LLM replaced by fakes."""
    from dependency_injector import providers

    from review_panel.app.container import Container

    def factory():
        container = Container()
        container.github.override(providers.Object(source))
        container.llm.override(providers.Object(llm))
        return container

    return factory


def make_container(config, source, llm):
    container = container_factory(source, llm)()
    container.config.from_pydantic(config)
    container.init_resources()
    return container
