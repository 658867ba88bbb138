# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Filtering of a page of closed pull requests down to deletion candidates.

Stages run in a fixed order, cheapest first:
    1. merged only
    2. head branch not in the forbidden set
    3. base branch in the allowed set
    4. head branch still exists (network; fanned out across the page)
    5. merged at least ``age_threshold_months`` ago
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from branchnuker.classes import Candidate, PullRequest, RunConfig
from branchnuker.discovery.age import months_since
from branchnuker.utils.logging import log

BranchLookup = Callable[[str], bool]


def _should_skip_pull_request(pr: PullRequest, config: RunConfig) -> Tuple[bool, Optional[str]]:
    """
    Apply the local (no network) checks to a PR.

    Returns:
        tuple[bool, Optional[str]]: (should_skip, skip_reason)
    """
    if not pr.is_merged:
        return (True, f'Skipping PR #{pr.number} - closed without merging')

    if pr.head_branch in config.forbidden_head_refs:
        return (True, f"Skipping PR #{pr.number} - head branch '{pr.head_branch}' is protected")

    if pr.base_branch not in config.allowed_base_refs:
        return (
            True,
            f"Skipping PR #{pr.number} - merged to '{pr.base_branch}' "
            f"(allowed: {', '.join(sorted(config.allowed_base_refs))})",
        )

    return (False, None)


def _lookup_branch(pr: PullRequest, branch_exists: BranchLookup) -> bool:
    try:
        exists = branch_exists(pr.head_branch)
    except Exception as e:
        log.info(f"Branch '{pr.head_branch}' of PR #{pr.number} could not be looked up ({e}), skipping")
        return False

    if not exists:
        log.info(f"Branch '{pr.head_branch}' of PR #{pr.number} not found, skipping")
    return bool(exists)


def _check_branches_exist(pull_requests: Sequence[PullRequest], branch_exists: BranchLookup) -> List[bool]:
    """Look up every head branch concurrently and wait for all of them."""
    if not pull_requests:
        return []
    with ThreadPoolExecutor(max_workers=len(pull_requests)) as pool:
        return list(pool.map(lambda pr: _lookup_branch(pr, branch_exists), pull_requests))


def filter_pull_requests(
    pull_requests: Sequence[PullRequest],
    config: RunConfig,
    branch_exists: BranchLookup,
    now: Optional[Callable[[], datetime]] = None,
) -> List[Candidate]:
    """
    Reduce a batch of closed PRs to stale-branch candidates.

    Never raises: lookup errors and unparseable timestamps only exclude the
    affected PR. Output keeps the input order.

    Args:
        pull_requests: One fetched page, in API order
        config: Run configuration (ref sets and age threshold)
        branch_exists: Returns True if the branch is still present; may raise
        now: Clock, called once per batch. Defaults to UTC wall-clock time.

    Returns:
        List[Candidate]: Candidates whose age is at least the configured threshold
    """
    survivors: List[PullRequest] = []
    for pr in pull_requests:
        should_skip, skip_reason = _should_skip_pull_request(pr, config)
        if should_skip:
            log.debug(skip_reason)
            continue
        survivors.append(pr)

    existing = [pr for pr, exists in zip(survivors, _check_branches_exist(survivors, branch_exists)) if exists]

    reference = now() if now else datetime.now(timezone.utc)
    candidates: List[Candidate] = []
    for pr in existing:
        age = months_since(pr.merged_at, reference)
        if age is None:
            log.info(f"Skipping PR #{pr.number} - unreadable merge timestamp '{pr.merged_at}'")
            continue
        if age < config.age_threshold_months:
            log.debug(
                f'Skipping PR #{pr.number} - merged {age:.2f} months ago '
                f'(threshold {config.age_threshold_months})'
            )
            continue

        candidates.append(
            Candidate(
                number=pr.number,
                title=pr.title,
                state=pr.state,
                branch_name=pr.head_branch,
                base_branch_name=pr.base_branch,
                merged_at=pr.merged_at,
                age_months=age,
                html_url=pr.html_url,
            )
        )

    return candidates
