"""
Records passed between the GitHub client, the exporter and the markdown
generator.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO 8601 timestamp ("2024-01-15T10:00:00Z")."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def _login(data: Dict[str, Any]) -> str:
    # Deleted accounts come back as user: null
    user = data.get('user') or {}
    return user.get('login', 'ghost')


@dataclass
class Issue:
    number: int
    title: str
    author: str
    body: str
    state: str
    created_at: Optional[datetime]
    url: str
    comment_count: int = 0
    labels: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Issue':
        """
        Build an Issue from a GitHub API issue object.

        Args:
            data (Dict[str, Any]): Decoded JSON of one issue.

        Returns:
            Issue: The issue with the fields this tool renders.
        """
        return cls(
            number=data['number'],
            title=data.get('title') or '',
            author=_login(data),
            body=data.get('body') or '',
            state=data.get('state', 'open'),
            created_at=parse_timestamp(data.get('created_at')),
            url=data.get('html_url') or '',
            comment_count=data.get('comments') or 0,
            labels=[label['name'] for label in data.get('labels') or [] if label.get('name')],
        )


@dataclass
class Comment:
    author: str
    body: str
    created_at: Optional[datetime]
    url: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Comment':
        """Build a Comment from a GitHub API issue comment object."""
        return cls(
            author=_login(data),
            body=data.get('body') or '',
            created_at=parse_timestamp(data.get('created_at')),
            url=data.get('html_url') or '',
        )


@dataclass(frozen=True)
class ExportTarget:
    """Repository, and optionally a single issue, to export."""

    owner: str
    repo: str
    issue_number: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        if self.issue_number is None:
            return self.full_name
        return f"{self.full_name}#{self.issue_number}"


@dataclass
class RenderedDocument:
    filename: str
    content: str
