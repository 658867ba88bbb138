# The MIT License (MIT)
# Copyright © 2025 Entrius

from typing import Callable, Sequence

from branchnuker.classes import Candidate, DeletionOutcome, DeletionReport
from branchnuker.utils.logging import log

RefDeleter = Callable[[str], object]


def delete_candidates(candidates: Sequence[Candidate], delete_ref: RefDeleter) -> DeletionReport:
    """
    Delete each candidate's head branch, one at a time and in order.

    A failure is logged and recorded, never raised, so one bad branch cannot
    stop the rest of the batch. There are no retries.
    """
    report = DeletionReport()
    total = len(candidates)

    for index, candidate in enumerate(candidates, 1):
        log.info(f'[{index}/{total}] Attempting to remove {candidate.branch_name} (PR #{candidate.number})')
        try:
            delete_ref(candidate.branch_name)
        except Exception as e:
            log.error(
                f'An error occurred while deleting {candidate.html_url} head branch: {candidate.branch_name} ({e})'
            )
            report.outcomes.append(DeletionOutcome(candidate=candidate, success=False, error=str(e)))
            continue

        log.info(f'[{index}/{total}] Done')
        report.outcomes.append(DeletionOutcome(candidate=candidate, success=True))

    log.info(f'Removed {report.succeeded} branches, {report.failed} failed')
    return report


def log_dry_run(candidates: Sequence[Candidate]) -> None:
    """Log what a NUKE run would delete, without touching anything."""
    log.info('Dry run: logging the branches that would be removed')
    for candidate in candidates:
        log.info(
            f'Would remove {candidate.branch_name} - PR #{candidate.number} is '
            f'{candidate.age_months:.4g} months old ({candidate.html_url})'
        )
