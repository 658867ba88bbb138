# The MIT License (MIT)
# Copyright © 2025 Entrius

from datetime import datetime
from typing import Callable, List, Optional, Set

from branchnuker.classes import DiscoveryResult, PullRequest, RunConfig
from branchnuker.discovery.filters import BranchLookup, filter_pull_requests
from branchnuker.utils.logging import log

PageFetcher = Callable[[int, int], List[PullRequest]]


def collect_candidates(
    config: RunConfig,
    fetch_page: PageFetcher,
    branch_exists: BranchLookup,
    now: Optional[Callable[[], datetime]] = None,
) -> DiscoveryResult:
    """
    Walk closed PR pages from page 1 until the data runs out or the cap is hit.

    Each page is filtered as a whole before the next one is requested, so the
    page that crosses ``max_candidates`` contributes all of its candidates.
    Errors from ``fetch_page`` propagate unchanged.

    Args:
        config: Run configuration
        fetch_page: Called as fetch_page(page_number, page_size)
        branch_exists: Branch existence lookup handed to the filter stage
        now: Optional clock for the age stage

    Returns:
        DiscoveryResult with the accumulated candidates
    """
    result = DiscoveryResult()
    seen: Set[int] = set()
    page = 1

    while True:
        log.info(f'Page {page}, getting closed PRs...')
        pull_requests = fetch_page(page, config.page_size)
        result.pages_fetched = page

        if not pull_requests:
            log.info('No more PRs to process or fetch')
            break

        page_candidates = filter_pull_requests(pull_requests, config, branch_exists, now=now)

        added = 0
        for candidate in page_candidates:
            if candidate.number in seen:
                log.debug(f'PR #{candidate.number} already collected from an earlier page, ignoring')
                continue
            seen.add(candidate.number)
            result.candidates.append(candidate)
            added += 1

        log.info(f'{added} merged PRs are processed')

        if len(result.candidates) >= config.max_candidates:
            log.info(f'Maximum allowed amount ({config.max_candidates}) of PRs is reached')
            result.cap_reached = True
            break

        page += 1

    return result
