"""
Export orchestration.

Parses the owner/repo[#issue] target, fetches issues and their comments
through the GitHub client, renders them with MarkdownGenerator and writes one
file per issue into the configured output directory.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from config import ExportConfig
from errors import ExportIOError, InvalidTargetError, NotFoundError, ServerError
from github_client import GitHubClient
from markdown_generator import MarkdownGenerator
from models import Comment, ExportTarget, Issue

_TARGET_RE = re.compile(r'^(?P<owner>[^/#\s]+)/(?P<repo>[^/#\s]+)(?:#(?P<number>\d+))?$')


def parse_target(query: str) -> ExportTarget:
    """
    Parse an ``owner/repo[#issue_number]`` argument.

    Args:
        query (str): The command-line argument.

    Returns:
        ExportTarget: Owner, repository and optional issue number.

    Raises:
        InvalidTargetError: If the owner or repository is missing, there is
            more than one separator, or the issue number is not a positive
            integer.
    """
    match = _TARGET_RE.match(query or '')
    if not match:
        raise InvalidTargetError(f"Wrong argument: {query!r}, expected owner/repo or owner/repo#issue_number")

    number = match.group('number')
    issue_number = int(number) if number is not None else None
    if issue_number == 0:
        raise InvalidTargetError(f"Wrong argument: {query!r}, issue numbers start at 1")

    return ExportTarget(match.group('owner'), match.group('repo'), issue_number)


@dataclass
class IssueFailure:
    number: int
    reason: str


@dataclass
class ExportResult:
    """
    Outcome of an export run.

    Attributes:
        written (List[Path]): Files written, in processing order.
        failures (List[IssueFailure]): Issues that hit a recoverable error.
            An issue whose comments could not be fetched is still written.
        processed (int): Number of issues handled.
    """

    written: List[Path] = field(default_factory=list)
    failures: List[IssueFailure] = field(default_factory=list)
    processed: int = 0

    @property
    def ok(self) -> bool:
        """False only when issues were processed and every one of them failed."""
        if not self.processed:
            return True
        failed = {failure.number for failure in self.failures}
        return len(failed) < self.processed


class Exporter:
    """
    Export the issues of one repository to Markdown files.

    Authentication and rate-limit errors abort the run wherever they occur,
    as does a failure to resolve the target itself (unknown repository or
    issue). Failures confined to one issue, such as its comments not loading
    or its file not being writable, are logged and recorded in the result
    while the remaining issues are exported.
    """

    def __init__(
            self,
            config: ExportConfig,
            client: Optional[GitHubClient] = None,
            generator: Optional[MarkdownGenerator] = None,
            logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the exporter.

        Args:
            config (ExportConfig): Token, output directory and state filter.
            client (Optional[GitHubClient]): Anything providing list_issues,
                get_issue and list_comments. Built from config if omitted.
            generator (Optional[MarkdownGenerator]): Markdown renderer.
            logger (Optional[logging.Logger]): Logger instance.
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or GitHubClient(config.token, api_url=config.api_url, logger=self.logger)
        self.generator = generator or MarkdownGenerator()

    def export(self, target: ExportTarget) -> ExportResult:
        """
        Run the export for a target.

        Args:
            target (ExportTarget): Repository and optional single issue.

        Returns:
            ExportResult: Files written and per-issue failures.

        Raises:
            ExportIOError: If the output directory cannot be created.
            AuthFailedError: If the token is rejected.
            RateLimitedError: If the API rate limit is exhausted.
            NotFoundError: If the repository or requested issue is missing.
        """
        self.ensure_output_dir()

        if target.issue_number is not None:
            self.logger.info(f"Fetching issue {target}")
            issues: Iterable[Issue] = [
                self.client.get_issue(target.owner, target.repo, target.issue_number)
            ]
        else:
            self.logger.info(f"Fetching {self.config.state} issues of {target}")
            issues = self.client.list_issues(target.owner, target.repo, self.config.state)

        result = ExportResult()
        for issue in issues:
            result.processed += 1
            self._export_issue(target, issue, result)

        self.logger.info(
            f"Exported {len(result.written)} of {result.processed} issues from {target.full_name} "
            f"to {self.config.output_dir}"
        )
        if result.failures:
            self.logger.warning(
                f"{len(result.failures)} issues had errors: "
                + ", ".join(f"#{failure.number}" for failure in result.failures)
            )
        return result

    def ensure_output_dir(self) -> Path:
        output_dir = self.config.output_dir
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportIOError(f"Cannot create output directory {output_dir}: {e}") from e
        return output_dir

    def _export_issue(self, target: ExportTarget, issue: Issue, result: ExportResult) -> None:
        comments: List[Comment] = []
        comments_error = None

        if issue.comment_count:
            try:
                comments = list(self.client.list_comments(target.owner, target.repo, issue.number))
            except (NotFoundError, ServerError) as e:
                comments_error = str(e)
                self.logger.warning(f"Could not fetch comments of {target.full_name}#{issue.number}: {e}")
                result.failures.append(IssueFailure(issue.number, comments_error))

        document = self.generator.document(issue, comments, comments_error)
        path = self.config.output_dir / document.filename
        try:
            path.write_text(document.content, encoding='utf-8')
        except OSError as e:
            self.logger.error(f"Could not write {path} for {target.full_name}#{issue.number}: {e}")
            result.failures.append(IssueFailure(issue.number, f"write failed: {e}"))
            return

        self.logger.info(f"Wrote {path}")
        result.written.append(path)
