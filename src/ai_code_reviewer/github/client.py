"""
GitHub REST Client

Blocking client for the pull request, repository and user endpoints
used by the reviewer. Callers in async code wrap it with
`asyncio.to_thread`.
"""

import time
import logging
from typing import Dict, List, Optional, Tuple
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = 'application/vnd.github.v3+json'
DIFF_MEDIA_TYPE = 'application/vnd.github.v3.diff'
HTTP_NOT_ACCEPTABLE = 406
HTTP_TOO_MANY_REQUESTS = 429

# 406 must reach DiffSource untouched
RETRY_STATUSES = (500, 502, 503, 504)
RATE_LIMIT_FLOOR = 10


class GitHubAPIError(Exception):
    """Non-success response or transport failure talking to GitHub."""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data

    @property
    def is_not_acceptable(self) -> bool:
        """True when GitHub refused to render the requested media type."""
        return self.status_code == HTTP_NOT_ACCEPTABLE


class RateLimitExceeded(GitHubAPIError):
    """Request budget exhausted until `reset_time`."""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=HTTP_TOO_MANY_REQUESTS)
        self.reset_time = reset_time


class GitHubClient:
    """
    Token-authenticated GitHub client.

    Server errors are retried by the session adapter. The remaining
    request budget is read from every response, and calls are refused
    locally once it drops to RATE_LIMIT_FLOOR before the reset time.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: int = 30):
        """
        Args:
            token: Personal access token
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._build_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    def _build_session(self) -> requests.Session:
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=Retry(total=3, backoff_factor=1, status_forcelist=RETRY_STATUSES))
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': JSON_MEDIA_TYPE,
            'User-Agent': 'AI-Code-Reviewer/1.0'
        })
        return session

    def close(self) -> None:
        self.session.close()

    def _guard_rate_limit(self) -> None:
        if self.rate_limit_remaining > RATE_LIMIT_FLOOR:
            return
        wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
        if wait_time > 0:
            logger.warning(f"Only {self.rate_limit_remaining} requests left, budget resets in {wait_time:.1f}s")
            raise RateLimitExceeded(self.rate_limit_reset)

    def _record_rate_limit(self, headers) -> None:
        if 'X-RateLimit-Remaining' in headers:
            self.rate_limit_remaining = int(headers['X-RateLimit-Remaining'])
        if 'X-RateLimit-Reset' in headers:
            self.rate_limit_reset = datetime.fromtimestamp(int(headers['X-RateLimit-Reset']))

    def _get(self, endpoint: str, **kwargs) -> requests.Response:
        """
        GET `endpoint` relative to the API root.

        Raises:
            RateLimitExceeded: budget exhausted, locally or by a 429
            GitHubAPIError: transport failure or any other non-2xx status
        """
        self._guard_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request('GET', url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise GitHubAPIError(f"Request failed: {e}") from e

        self._record_rate_limit(response.headers)

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            reset = int(response.headers.get('X-RateLimit-Reset', time.time() + 3600))
            raise RateLimitExceeded(datetime.fromtimestamp(reset))

        if not response.ok:
            error_data = self._error_payload(response)
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    @staticmethod
    def _error_payload(response: requests.Response) -> Dict:
        # diff requests can fail with a non-JSON body
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """PR metadata as returned by `GET /repos/{owner}/{repo}/pulls/{number}`."""
        logger.info(f"Fetching PR {owner}/{repo}#{pr_number}")
        return self._get(f'/repos/{owner}/{repo}/pulls/{pr_number}').json()

    def get_pull_request_diff(self, owner: str, repo: str, pr_number: int) -> str:
        """
        Unified diff of a pull request.

        Raises:
            GitHubAPIError: with status 406 when the diff is too large to render
        """
        logger.info(f"Fetching diff for {owner}/{repo}#{pr_number}")
        response = self._get(
            f'/repos/{owner}/{repo}/pulls/{pr_number}',
            headers={'Accept': DIFF_MEDIA_TYPE},
        )
        return response.text

    def get_pull_request_files(self, owner: str, repo: str, pr_number: int, per_page: int = 100) -> List[Dict]:
        """
        Every entry of the PR files listing, following pages until a short one.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            per_page: Page size (GitHub caps this at 100)
        """
        files: List[Dict] = []
        page = 1

        while True:
            batch = self._get(
                f'/repos/{owner}/{repo}/pulls/{pr_number}/files',
                params={'page': page, 'per_page': per_page}
            ).json()
            files.extend(batch)
            if len(batch) < per_page:
                break
            page += 1

        logger.info(f"{owner}/{repo}#{pr_number} changes {len(files)} files")
        return files

    def get_repository_info(self, owner: str, repo: str) -> Dict:
        logger.info(f"Fetching repository info for {owner}/{repo}")
        return self._get(f'/repos/{owner}/{repo}').json()

    def list_branches(self, owner: str, repo: str) -> List[Dict]:
        """First 100 branches."""
        logger.info(f"Fetching branches for {owner}/{repo}")
        return self._get(f'/repos/{owner}/{repo}/branches', params={'per_page': 100}).json()

    def test_authentication(self) -> Tuple[bool, Dict]:
        """
        Check the token against `GET /user`.

        Returns:
            (True, user data) on success, (False, {}) otherwise
        """
        try:
            user_data = self._get('/user').json()
        except GitHubAPIError as e:
            logger.error(f"Authentication failed: {e}")
            return False, {}

        logger.info(f"Authenticated as {user_data.get('login')}")
        return True, user_data
