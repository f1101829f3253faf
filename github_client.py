"""
GitHub REST API client.

This module handles all interactions with the GitHub REST API: token
authentication, issue and comment retrieval, and Link-header pagination.
Unsuccessful responses are translated into the errors defined in errors.py;
nothing is retried.
"""

import logging
from typing import Any, Dict, Iterator, Optional

import requests

from config import DEFAULT_API_URL, USER_AGENT
from errors import AuthFailedError, NotFoundError, RateLimitedError, ServerError
from models import Comment, Issue

# Hard stop for pagination: 1000 pages of 100 items is far beyond any
# repository this tool is meant for.
MAX_PAGES = 1000


class GitHubClient:
    """
    Client for the issues and comments endpoints of the GitHub REST API.

    List operations are generators: pages are requested as the caller
    iterates, and calling the method again starts from the first page.
    """

    def __init__(
            self,
            token: str,
            api_url: str = DEFAULT_API_URL,
            per_page: int = 100,
            timeout: float = 30,
            logger: Optional[logging.Logger] = None,
            session: Optional[requests.Session] = None
    ):
        """
        Initialize the GitHub client.

        Args:
            token (str): GitHub personal access token.
            api_url (str): Base URL of the REST API.
            per_page (int): Page size requested from list endpoints (max 100).
            timeout (float): Per-request timeout in seconds.
            logger (Optional[logging.Logger]): Logger instance for debugging.
            session (Optional[requests.Session]): Session to reuse, mostly
                for tests.
        """
        self.base_url = api_url.rstrip('/')
        self.per_page = per_page
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        })

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> 'GitHubClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def test_connection(self) -> bool:
        """
        Check that the token is accepted by the API.

        Returns:
            bool: True if the authenticated user could be fetched.

        Raises:
            AuthFailedError: If the token is rejected.
        """
        self.logger.debug(f"Testing connection to {self.base_url}")
        response = self._get(f"{self.base_url}/user", what="authenticated user")
        login = self._decode(response, "authenticated user").get('login', '')
        self.logger.info(f"Authenticated as {login}")
        return True

    def get_issue(self, owner: str, repo: str, number: int) -> Issue:
        """
        Fetch a single issue.

        Args:
            owner (str): Repository owner (user or organization).
            repo (str): Repository name.
            number (int): Issue number.

        Returns:
            Issue: The requested issue.

        Raises:
            NotFoundError: If the repository or issue does not exist.
        """
        what = f"issue {owner}/{repo}#{number}"
        self.logger.debug(f"Fetching {what}")
        response = self._get(f"{self.base_url}/repos/{owner}/{repo}/issues/{number}", what=what)
        return Issue.from_api(self._decode(response, what))

    def list_issues(self, owner: str, repo: str, state: str = 'open') -> Iterator[Issue]:
        """
        Iterate over the issues of a repository, in server order.

        The issues endpoint also returns pull requests; those are skipped.

        Args:
            owner (str): Repository owner.
            repo (str): Repository name.
            state (str): 'open', 'closed' or 'all'.

        Yields:
            Issue: Each issue of the requested state.
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/issues"
        params = {'state': state, 'per_page': self.per_page}
        skipped = 0
        for item in self._paginate(url, params, what=f"issues of {owner}/{repo}"):
            if 'pull_request' in item:
                skipped += 1
                continue
            yield Issue.from_api(item)

        if skipped:
            self.logger.debug(f"Skipped {skipped} pull requests in {owner}/{repo}")

    def list_comments(self, owner: str, repo: str, issue_number: int) -> Iterator[Comment]:
        """
        Iterate over the comments of an issue, in server order.

        Args:
            owner (str): Repository owner.
            repo (str): Repository name.
            issue_number (int): Issue whose comments are listed.

        Yields:
            Comment: Each comment on the issue.
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/issues/{issue_number}/comments"
        params = {'per_page': self.per_page}
        what = f"comments of {owner}/{repo}#{issue_number}"
        for item in self._paginate(url, params, what=what):
            yield Comment.from_api(item)

    def _paginate(self, url: str, params: Dict[str, Any], what: str) -> Iterator[Dict[str, Any]]:
        """
        Yield the items of every page of a list endpoint.

        The next page URL is taken from the Link header and already carries
        the query string, so params are only sent with the first request.
        Iteration ends on an empty page, when there is no next link, or at
        MAX_PAGES.

        Args:
            url (str): URL of the first page.
            params (Dict[str, Any]): Query parameters for the first page.
            what (str): Description of the resource for log and error messages.

        Yields:
            Dict[str, Any]: Raw JSON objects from each page.
        """
        page_count = 0
        next_url: Optional[str] = url

        while next_url:
            page_count += 1
            self.logger.debug(f"Fetching {what}: page {page_count}")

            response = self._get(next_url, what=what, params=params if page_count == 1 else None)
            items = self._decode(response, what)

            if not isinstance(items, list):
                raise ServerError(f"Unexpected response for {what}: expected a list", response.status_code)

            if not items:
                self.logger.debug(f"Page {page_count} of {what} is empty - reached end of results")
                break

            self.logger.debug(f"Page {page_count}: got {len(items)} items")
            yield from items

            next_url = response.links.get('next', {}).get('url')

            if next_url and page_count >= MAX_PAGES:
                self.logger.warning(
                    f"Reached maximum page limit ({page_count} pages) for {what}. "
                    f"Remaining pages are not exported."
                )
                break

    def _get(self, url: str, what: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ServerError(f"Request for {what} failed: {e}") from e

        self._check_response(response, what)
        return response

    def _decode(self, response: requests.Response, what: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(f"Could not parse response for {what}: {e}", response.status_code) from e

    def _check_response(self, response: requests.Response, what: str) -> None:
        """
        Raise the error matching an unsuccessful response.

        Args:
            response (requests.Response): Response to inspect.
            what (str): Description of the requested resource.

        Raises:
            AuthFailedError: On 401, or 403 with rate limit remaining.
            RateLimitedError: On 429, or 403 with an exhausted rate limit.
            NotFoundError: On 404.
            ServerError: On any other non-2xx status.
        """
        status = response.status_code
        if 200 <= status < 300:
            return

        detail = self._error_message(response)
        message = f"GitHub API returned {status} for {what}" + (f": {detail}" if detail else "")
        self.logger.debug(message)

        remaining = response.headers.get('X-RateLimit-Remaining')
        if status == 429 or (status == 403 and remaining == '0'):
            reset = response.headers.get('X-RateLimit-Reset')
            reset_at = int(reset) if reset and reset.isdigit() else None
            raise RateLimitedError(message, status, reset_at)
        if status in (401, 403):
            raise AuthFailedError(message, status)
        if status == 404:
            raise NotFoundError(f"Not found: {what}", status)
        raise ServerError(message, status)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return (response.text or '').strip()[:200]
        if isinstance(data, dict):
            return data.get('message', '')
        return ''
