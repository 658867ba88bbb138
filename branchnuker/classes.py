# The MIT License (MIT)
# Copyright © 2025 Entrius

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class Mode(str, Enum):
    """Execution mode. Values are the exact tokens typed at the mode prompt."""

    DRYRUN = 'DRYRUN'
    NUKE = 'NUKE'


@dataclass(frozen=True)
class PullRequest:
    """A closed pull request as returned by the GitHub pulls endpoint"""

    number: int
    title: str
    state: str
    merged_at: Optional[str]  # None means closed without merging
    head_branch: str
    base_branch: str
    html_url: str

    @property
    def is_merged(self) -> bool:
        return bool(self.merged_at)

    @classmethod
    def from_github_response(cls, pr: Dict[str, Any]) -> 'PullRequest':
        """Create PullRequest from a GitHub REST pulls payload"""
        head = pr.get('head') or {}
        base = pr.get('base') or {}
        return cls(
            number=pr['number'],
            title=pr.get('title') or '',
            state=pr.get('state') or '',
            merged_at=pr.get('merged_at'),
            head_branch=head.get('ref') or '',
            base_branch=base.get('ref') or '',
            html_url=pr.get('html_url') or '',
        )


@dataclass(frozen=True)
class Candidate:
    """A merged PR whose head branch still exists and is old enough to delete"""

    number: int
    title: str
    state: str
    branch_name: str
    base_branch_name: str
    merged_at: str
    age_months: float
    html_url: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RunConfig:
    """Immutable settings for one cleanup run."""

    owner: str
    repo: str
    token: str
    age_threshold_months: int
    max_candidates: int
    page_size: int
    forbidden_head_refs: FrozenSet[str]
    allowed_base_refs: FrozenSet[str]
    output_path: str

    @property
    def full_name(self) -> str:
        return f'{self.owner}/{self.repo}'

    def __repr__(self) -> str:
        # keep the token out of tracebacks and debug logs
        return f'RunConfig(repo={self.full_name}, age>={self.age_threshold_months}mo, max={self.max_candidates})'


@dataclass
class DiscoveryResult:
    """Output of the paginated discovery phase"""

    candidates: List[Candidate] = field(default_factory=list)
    pages_fetched: int = 0
    cap_reached: bool = False


@dataclass(frozen=True)
class DeletionOutcome:
    candidate: Candidate
    success: bool
    error: Optional[str] = None


@dataclass
class DeletionReport:
    """Per-branch results of a NUKE run"""

    outcomes: List[DeletionOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)
