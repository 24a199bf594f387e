from __future__ import annotations

from ..domain.exceptions import ValidationError
from ..domain.models import ParsedReference, ReferenceKind, ReviewContent
from ..ports import ContentSourcePort, LoggerPort
from .diff_service import DiffService


class ContentFetcher:
    """Resolves a classified reference into a commit fingerprint and review content.

    Pull requests are reviewed from their diff; repositories, branches and commits
    are reviewed from repository metadata and the README.
    """

    def __init__(
        self,
        *,
        source: ContentSourcePort,
        diff_service: DiffService,
        logger: LoggerPort,
    ) -> None:
        self._source = source
        self._diff_service = diff_service
        self._logger = logger

    def fetch_fingerprint(self, ref: ParsedReference) -> str:
        """Return the commit SHA that identifies the current state of ``ref``."""
        if ref.kind is ReferenceKind.PR:
            return self._source.fetch_pr_head_sha(ref.owner, ref.repo, int(ref.identifier))
        if ref.kind is ReferenceKind.REPO:
            return self._source.fetch_default_branch_sha(ref.owner, ref.repo)
        if ref.kind is ReferenceKind.COMMIT:
            return self._source.fetch_commit_sha(ref.owner, ref.repo, str(ref.identifier))
        if ref.kind is ReferenceKind.BRANCH:
            return self._source.fetch_branch_sha(ref.owner, ref.repo, str(ref.identifier))
        raise ValidationError(f"Unsupported URL type: {ref.kind.value}", code="INVALID_URL")

    def fetch_content(self, ref: ParsedReference) -> ReviewContent:
        if ref.kind is ReferenceKind.PR:
            return self._pull_request_content(ref)
        return self._repository_content(ref)

    def _pull_request_content(self, ref: ParsedReference) -> ReviewContent:
        number = int(ref.identifier)
        pr = self._source.fetch_pull_request(ref.owner, ref.repo, number)
        files = self._source.fetch_pull_request_files(ref.owner, ref.repo, number)
        diff = self._diff_service.build(files)
        self._logger.info(
            "diff_built",
            url=ref.normalized_url,
            files_total=diff.files_total,
            files_included=diff.files_included,
            diff_len=len(diff.text),
            truncated=diff.was_truncated,
        )

        content = (
            f"# Pull Request: {pr.title}\n\n"
            f"## Description\n{pr.body or 'No description provided.'}\n\n"
            "## Changes Summary\n"
            f"- Files changed: {pr.changed_files}\n"
            f"- Additions: +{pr.additions}\n"
            f"- Deletions: -{pr.deletions}\n"
            f"- Commits: {pr.commits}\n"
            f"- Status: {'DRAFT' if pr.is_draft else 'Ready'}\n\n"
            f"## File Changes\n{diff.text}"
        ).strip()

        return ReviewContent(
            review_type="pr",
            content=content,
            metadata={
                "author": pr.author,
                "filesChanged": pr.changed_files,
                "additions": pr.additions,
                "deletions": pr.deletions,
                "isDraft": pr.is_draft,
                "commits": pr.commits,
                "prNumber": pr.number,
            },
        )

    def _repository_content(self, ref: ParsedReference) -> ReviewContent:
        info = self._source.fetch_repository(ref.owner, ref.repo)

        content = (
            f"# Repository: {info.name}\n\n"
            f"## Description\n{info.description or 'No description provided.'}\n\n"
            "## Repository Info\n"
            f"- Primary Language: {info.language or 'Not specified'}\n"
            f"- Stars: {info.stars}\n"
            f"- Has Tests: {'Yes' if info.has_tests else 'No or not detected'}\n\n"
            f"## README\n{info.readme_content or 'No README found.'}"
        ).strip()

        return ReviewContent(
            review_type="repo",
            content=content,
            metadata={
                "name": info.name,
                "language": info.language,
                "stars": info.stars,
                "hasTests": info.has_tests,
            },
        )
