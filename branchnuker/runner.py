# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
One cleanup run: confirmation gate, discovery, result file, deletion.

The runner only talks to the outside world through three seams so it can be
driven from tests: a GitHub client, an ``ask`` callable for operator input
and an optional clock.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from branchnuker.classes import Candidate, DeletionReport, DiscoveryResult, Mode, RunConfig
from branchnuker.discovery.paginator import collect_candidates
from branchnuker.storage import write_candidates
from branchnuker.utils.github_api_tools import GitHubClient
from branchnuker.utils.logging import log
from branchnuker.workflow.confirmation import ConfirmationWorkflow, WorkflowState
from branchnuker.workflow.deletion import delete_candidates, log_dry_run

Ask = Callable[[str], str]


@dataclass
class RunResult:
    state: WorkflowState
    mode: Optional[Mode]
    exit_code: int
    discovery: Optional[DiscoveryResult] = None
    report: Optional[DeletionReport] = None
    aborted_at: Optional[WorkflowState] = None

    @property
    def candidates(self) -> List[Candidate]:
        return self.discovery.candidates if self.discovery else []


@dataclass
class CleanupRun:
    config: RunConfig
    client: GitHubClient
    ask: Ask
    now: Optional[Callable[[], datetime]] = None
    workflow: ConfirmationWorkflow = field(default_factory=ConfirmationWorkflow)

    def _discover(self) -> DiscoveryResult:
        log.info('There is no turning back now...')
        discovery = collect_candidates(
            self.config,
            self.client.list_closed_pull_requests,
            self.client.branch_exists,
            now=self.now,
        )
        write_candidates(discovery.candidates, self.config.output_path)
        log.info(f'Got {len(discovery.candidates)} merged PRs')
        return discovery

    def _abort_message(self, state: WorkflowState) -> str:
        if state is WorkflowState.SELECT_MODE:
            return 'Unsupported mode. Exiting... your branches are safe.'
        if state is WorkflowState.AWAIT_NUKE_CONFIRM:
            return 'Final confirmation not given. Nothing was deleted, your branches are safe.'
        return 'Exiting... your branches are safe.'

    def execute(self) -> RunResult:
        """
        Drive the workflow to a terminal state.

        Raises:
            GitHubAPIError: if a page of pull requests cannot be fetched
        """
        workflow = self.workflow
        discovery: Optional[DiscoveryResult] = None
        report: Optional[DeletionReport] = None

        while not workflow.is_terminal:
            if workflow.state is WorkflowState.RUNNING:
                discovery = self._discover()
                workflow.advance()
                continue

            asked_in = workflow.state
            workflow.advance(self.ask(workflow.prompt))

            if workflow.is_aborted:
                log.warning(self._abort_message(asked_in))
                return RunResult(
                    state=workflow.state,
                    mode=workflow.mode,
                    exit_code=workflow.exit_code,
                    discovery=discovery,
                    aborted_at=asked_in,
                )

            if asked_in is WorkflowState.SELECT_MODE:
                log.info(f'Mode selected: {workflow.mode.value}')

        candidates = discovery.candidates if discovery else []
        if workflow.mode is Mode.NUKE:
            report = delete_candidates(candidates, self.client.delete_ref)
        else:
            log_dry_run(candidates)

        return RunResult(
            state=workflow.state,
            mode=workflow.mode,
            exit_code=workflow.exit_code,
            discovery=discovery,
            report=report,
        )
