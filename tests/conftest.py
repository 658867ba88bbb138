# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Shared fixtures for branchnuker tests."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Set

import pytest

from branchnuker.classes import PullRequest, RunConfig
from branchnuker.constants import SECONDS_PER_MONTH

NOW = datetime(2026, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def months_ago(months: float, now: datetime = NOW) -> str:
    """GitHub-style timestamp `months` 30-day months before now."""
    merged = now - timedelta(seconds=months * SECONDS_PER_MONTH)
    return merged.strftime('%Y-%m-%dT%H:%M:%SZ')


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient that records every call."""

    def __init__(
        self,
        pages: Optional[List[List[PullRequest]]] = None,
        branches: Optional[Set[str]] = None,
        failing_deletes: Optional[Set[str]] = None,
        failing_lookups: Optional[Set[str]] = None,
    ):
        self.pages = pages or []
        self.branches = set(branches or ())
        self.failing_deletes = set(failing_deletes or ())
        self.failing_lookups = set(failing_lookups or ())
        self.fetched_pages: List[int] = []
        self.lookups: List[str] = []
        self.deleted: List[str] = []
        self.delete_attempts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.fetched_pages) + len(self.lookups) + len(self.delete_attempts)

    def list_closed_pull_requests(self, page: int, per_page: int) -> List[PullRequest]:
        self.fetched_pages.append(page)
        if page <= len(self.pages):
            return self.pages[page - 1]
        return []

    def branch_exists(self, branch: str) -> bool:
        self.lookups.append(branch)
        if branch in self.failing_lookups:
            raise RuntimeError(f'lookup failed for {branch}')
        return branch in self.branches

    def delete_ref(self, branch: str) -> None:
        self.delete_attempts.append(branch)
        if branch in self.failing_deletes:
            raise RuntimeError(f'cannot delete {branch}')
        self.deleted.append(branch)
        self.branches.discard(branch)


@pytest.fixture
def now():
    return lambda: NOW


@pytest.fixture
def make_pr():
    """Factory for PullRequest records with sensible merged defaults."""

    def _make_pr(
        number: int = 1,
        head: Optional[str] = None,
        base: str = 'master',
        merged_at: Optional[str] = 'default',
        age_months: float = 4.0,
        title: Optional[str] = None,
    ) -> PullRequest:
        if merged_at == 'default':
            merged_at = months_ago(age_months)
        return PullRequest(
            number=number,
            title=title or f'PR #{number}',
            state='closed',
            merged_at=merged_at,
            head_branch=head or f'feature-{number}',
            base_branch=base,
            html_url=f'https://github.com/acme/widgets/pull/{number}',
        )

    return _make_pr


@pytest.fixture
def make_config(tmp_path):
    """Factory for RunConfig with the stock ref sets."""

    def _make_config(**overrides) -> RunConfig:
        params: Dict = {
            'owner': 'acme',
            'repo': 'widgets',
            'token': 'ghp_test_token_123456',
            'age_threshold_months': 3,
            'max_candidates': 100,
            'page_size': 30,
            'forbidden_head_refs': frozenset({'master', 'staging'}),
            'allowed_base_refs': frozenset({'master'}),
            'output_path': str(tmp_path / 'merged-prs.json'),
        }
        params.update(overrides)
        return RunConfig(**params)

    return _make_config


@pytest.fixture
def run_config(make_config):
    return make_config()


@pytest.fixture
def fake_client_factory():
    return FakeGitHubClient


@pytest.fixture
def ago():
    """months -> GitHub timestamp relative to the fixed test clock"""
    return months_ago


@pytest.fixture
def fixed_now():
    return NOW
