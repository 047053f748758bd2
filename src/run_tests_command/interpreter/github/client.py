"""GitHub API client wrapper.

This intentionally wraps PyGithub to keep GitHub calls out of CLI code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from github import Auth, Github
from github.Repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedComment:
    """Minimal comment metadata returned from GitHub."""

    issue_number: int
    comment_id: int
    url: str | None


class GitHubClient:
    """Small wrapper around PyGithub for posting issue / pull request comments."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=base_url.rstrip("/"))

        self._repo = self._github.get_repo(repository)
        logger.info(
            "Authenticated with GitHub and connected to repository", extra={"repo": repository}
        )

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def create_comment(self, *, issue_number: int, body: str) -> CreatedComment:
        """Create a comment on an issue or pull request.

        Pull requests share the issue comment endpoint, so both are addressed
        by their number.
        """

        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        if not body.strip():
            raise ValueError("Comment body is required")

        issue = self._repo.get_issue(number=issue_number)
        comment = issue.create_comment(body)

        logger.debug(
            "Created comment",
            extra={"repo": self._repository_name, "issue_number": issue_number, "id": comment.id},
        )
        return CreatedComment(
            issue_number=issue_number,
            comment_id=comment.id,
            url=getattr(comment, "html_url", None),
        )

    def post_comment(self, *, issue_number: int, body: str) -> None:
        self.create_comment(issue_number=issue_number, body=body)

    def close(self) -> None:
        if self._github is not None:
            self._github.close()
