# The MIT License (MIT)
# Copyright © 2025 Entrius

from typing import Iterable, Optional


class ConfigurationError(Exception):
    """Raised when required run configuration is missing."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class GitHubAPIError(Exception):
    """Raised when a GitHub REST call fails."""

    def __init__(self, method: str, url: str, status_code: Optional[int] = None, detail: str = ''):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.detail = detail
        status = f'status {status_code}' if status_code is not None else 'no response'
        message = f'{method} {url} failed ({status})'
        if detail:
            message = f'{message}: {detail}'
        super().__init__(message)


class InvalidTransitionError(Exception):
    """Raised when the confirmation workflow is advanced from a terminal state."""
