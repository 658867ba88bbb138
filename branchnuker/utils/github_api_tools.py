# Entrius 2025
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from branchnuker.classes import PullRequest
from branchnuker.constants import BASE_GITHUB_API_URL, GITHUB_API_TIMEOUT, RATE_LIMIT_MIN_REMAINING
from branchnuker.errors import GitHubAPIError
from branchnuker.utils.logging import log


@dataclass
class RateLimitInfo:
    """Represents GitHub API rate limit information extracted from response headers."""

    limit: int  # Maximum requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_timestamp: int  # Unix timestamp when the rate limit resets

    @property
    def seconds_until_reset(self) -> int:
        return max(0, self.reset_timestamp - int(time.time()))


def parse_rate_limit_headers(response: requests.Response) -> Optional[RateLimitInfo]:
    """
    Parse GitHub API rate limit information from response headers.

    Args:
        response: The HTTP response from GitHub API

    Returns:
        RateLimitInfo object if headers are present, None otherwise
    """
    headers = response.headers or {}

    try:
        limit = int(headers.get('X-RateLimit-Limit', 0))
        remaining = int(headers.get('X-RateLimit-Remaining', 0))
        reset_timestamp = int(headers.get('X-RateLimit-Reset', 0))
    except (ValueError, TypeError) as e:
        log.debug(f'Could not parse rate limit headers: {e}')
        return None

    if limit == 0 and reset_timestamp == 0:
        return None

    return RateLimitInfo(limit=limit, remaining=remaining, reset_timestamp=reset_timestamp)


def check_preemptive_rate_limit(response: requests.Response) -> None:
    """Log a warning when the remaining GitHub quota is running low."""
    rate_limit_info = parse_rate_limit_headers(response)

    if rate_limit_info and rate_limit_info.remaining <= RATE_LIMIT_MIN_REMAINING:
        log.warning(
            f'Approaching GitHub API rate limit: {rate_limit_info.remaining} requests remaining, '
            f'resets in {rate_limit_info.seconds_until_reset}s'
        )


def make_headers(token: str) -> Dict[str, str]:
    """Build standard GitHub HTTP headers for a PAT.

    Args:
        token (str): Github pat
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    return {
        'Authorization': f'token {token}',
        'Accept': 'application/vnd.github.v3+json',
    }


def _error_detail(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return (response.text or '').strip()[:200]
    if isinstance(payload, dict):
        return str(payload.get('message', ''))
    return ''


class GitHubClient:
    """Minimal REST client for the three calls a cleanup run needs.

    All calls are scoped to one repository. Failures are raised as
    GitHubAPIError; deciding whether a failure is fatal is left to the caller.
    """

    def __init__(self, owner: str, repo: str, token: str, timeout: int = GITHUB_API_TIMEOUT):
        self.owner = owner
        self.repo = repo
        self.timeout = timeout
        self._headers = make_headers(token)

    @property
    def repo_url(self) -> str:
        return f'{BASE_GITHUB_API_URL}/repos/{self.owner}/{self.repo}'

    def list_closed_pull_requests(self, page: int, per_page: int) -> List[PullRequest]:
        """Fetch one page of closed PRs, most recently updated first."""
        url = f'{self.repo_url}/pulls'
        params = {
            'state': 'closed',
            'sort': 'updated',
            'direction': 'desc',
            'page': page,
            'per_page': per_page,
        }
        try:
            response = requests.get(url, headers=self._headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError('GET', url, detail=str(e)) from e

        if response.status_code != 200:
            raise GitHubAPIError('GET', url, response.status_code, _error_detail(response))

        check_preemptive_rate_limit(response)
        payload: List[Dict[str, Any]] = response.json() or []
        return [PullRequest.from_github_response(pr) for pr in payload]

    def get_branch(self, branch: str) -> Optional[Dict[str, Any]]:
        """Return the branch payload, or None if the branch does not exist."""
        url = f"{self.repo_url}/branches/{quote(branch, safe='/')}"
        try:
            response = requests.get(url, headers=self._headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError('GET', url, detail=str(e)) from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise GitHubAPIError('GET', url, response.status_code, _error_detail(response))

        check_preemptive_rate_limit(response)
        return response.json()

    def branch_exists(self, branch: str) -> bool:
        return self.get_branch(branch) is not None

    def delete_ref(self, branch: str) -> None:
        """Delete refs/heads/<branch>. Raises GitHubAPIError unless GitHub answers 204."""
        url = f"{self.repo_url}/git/refs/heads/{quote(branch, safe='/')}"
        try:
            response = requests.delete(url, headers=self._headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError('DELETE', url, detail=str(e)) from e

        if response.status_code != 204:
            raise GitHubAPIError('DELETE', url, response.status_code, _error_detail(response))
