"""Shared fixtures for github-issues-export tests."""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

from errors import NotFoundError
from logger import LOGGER_NAME
from models import Comment, Issue


class FakeClient:
    """In-memory stand-in for GitHubClient."""

    def __init__(
            self,
            issues: Optional[List[Issue]] = None,
            comments: Optional[Dict[int, List[Comment]]] = None,
            comment_errors: Optional[Dict[int, Exception]] = None
    ):
        self.issues = issues or []
        self.comments = comments or {}
        self.comment_errors = comment_errors or {}
        self.calls = []

    def list_issues(self, owner, repo, state='open'):
        self.calls.append(('list_issues', owner, repo, state))
        return iter(self.issues)

    def get_issue(self, owner, repo, number):
        self.calls.append(('get_issue', owner, repo, number))
        for issue in self.issues:
            if issue.number == number:
                return issue
        raise NotFoundError(f"Not found: issue {owner}/{repo}#{number}", 404)

    def list_comments(self, owner, repo, issue_number):
        self.calls.append(('list_comments', owner, repo, issue_number))
        if issue_number in self.comment_errors:
            raise self.comment_errors[issue_number]
        return iter(self.comments.get(issue_number, []))


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Give every test a fresh application logger bound to the current stderr."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""

    def _make(status_code=200, json_data=None, links=None, headers=None, text=''):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = json_data
        response.links = links or {}
        response.headers = headers or {}
        response.text = text
        return response

    return _make


@pytest.fixture
def make_issue():
    def _make(number=1, title="Bug", body="It crashes", comment_count=0, **kwargs):
        fields = {
            'author': 'octocat',
            'state': 'open',
            'created_at': datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
            'url': f"https://github.com/owner/repo/issues/{number}",
        }
        fields.update(kwargs)
        return Issue(number=number, title=title, body=body, comment_count=comment_count, **fields)

    return _make


@pytest.fixture
def make_comment():
    def _make(author="alice", body="Me too", minute=0, url=''):
        return Comment(
            author=author,
            body=body,
            created_at=datetime(2024, 1, 16, 12, minute, tzinfo=timezone.utc),
            url=url,
        )

    return _make


@pytest.fixture
def fake_client():
    return FakeClient
