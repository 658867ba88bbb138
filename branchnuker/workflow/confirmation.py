# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Confirmation gate in front of branch deletion.

    SELECT_MODE -> AWAIT_RUN_CONFIRM -> RUNNING -> DONE                      (DRYRUN)
    SELECT_MODE -> AWAIT_RUN_CONFIRM -> RUNNING -> AWAIT_NUKE_CONFIRM -> DONE (NUKE)

Any rejected answer moves to ABORTED. DONE and ABORTED are terminal.
"""

from enum import Enum
from typing import Optional, Tuple

from branchnuker.classes import Mode
from branchnuker.constants import NUKE_CONFIRMATION, RUN_CONFIRMATION
from branchnuker.errors import InvalidTransitionError


class WorkflowState(str, Enum):
    SELECT_MODE = 'SELECT_MODE'
    AWAIT_RUN_CONFIRM = 'AWAIT_RUN_CONFIRM'
    RUNNING = 'RUNNING'
    AWAIT_NUKE_CONFIRM = 'AWAIT_NUKE_CONFIRM'
    DONE = 'DONE'
    ABORTED = 'ABORTED'


TERMINAL_STATES = frozenset({WorkflowState.DONE, WorkflowState.ABORTED})

PROMPTS = {
    (WorkflowState.SELECT_MODE, None): (
        'Type DRYRUN (default) or NUKE to select a mode. DRYRUN does nothing, just logs'
    ),
    (WorkflowState.AWAIT_RUN_CONFIRM, Mode.DRYRUN): 'Hit ENTER to continue',
    (WorkflowState.AWAIT_RUN_CONFIRM, Mode.NUKE): (
        f'Are you sure you want to continue? Type {RUN_CONFIRMATION} to continue'
    ),
    (WorkflowState.AWAIT_NUKE_CONFIRM, Mode.NUKE): (
        f'Getting ready for actually removing branches. Confirm this action by typing {NUKE_CONFIRMATION}. '
        'Note that this action cannot be undone'
    ),
}


def parse_mode(answer: Optional[str]) -> Optional[Mode]:
    """Map a mode-prompt answer to a Mode. Empty means DRYRUN; unknown tokens give None."""
    if not answer:
        return Mode.DRYRUN
    try:
        return Mode(answer)
    except ValueError:
        return None


def next_state(
    state: WorkflowState, mode: Optional[Mode], answer: Optional[str] = None
) -> Tuple[WorkflowState, Optional[Mode]]:
    """
    Pure transition function.

    Args:
        state: Current state
        mode: Mode selected so far (None before SELECT_MODE is answered)
        answer: Operator input for prompt states; ignored for RUNNING

    Returns:
        Tuple[WorkflowState, Optional[Mode]]: the new state and mode

    Raises:
        InvalidTransitionError: if state is terminal or inconsistent with mode
    """
    if state in TERMINAL_STATES:
        raise InvalidTransitionError(f'Cannot advance from terminal state {state.value}')

    if state is WorkflowState.SELECT_MODE:
        selected = parse_mode(answer)
        if selected is None:
            return (WorkflowState.ABORTED, None)
        return (WorkflowState.AWAIT_RUN_CONFIRM, selected)

    if mode is None:
        raise InvalidTransitionError(f'No mode selected in state {state.value}')

    if state is WorkflowState.AWAIT_RUN_CONFIRM:
        if mode is Mode.NUKE and answer != RUN_CONFIRMATION:
            return (WorkflowState.ABORTED, mode)
        return (WorkflowState.RUNNING, mode)

    if state is WorkflowState.RUNNING:
        if mode is Mode.NUKE:
            return (WorkflowState.AWAIT_NUKE_CONFIRM, mode)
        return (WorkflowState.DONE, mode)

    if state is WorkflowState.AWAIT_NUKE_CONFIRM:
        if mode is not Mode.NUKE:
            raise InvalidTransitionError('Final confirmation is only reachable in NUKE mode')
        if answer != NUKE_CONFIRMATION:
            return (WorkflowState.ABORTED, mode)
        return (WorkflowState.DONE, mode)

    raise InvalidTransitionError(f'Unknown state {state!r}')


class ConfirmationWorkflow:
    """Stateful wrapper around next_state that remembers the selected mode."""

    def __init__(self):
        self.state = WorkflowState.SELECT_MODE
        self.mode: Optional[Mode] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def is_aborted(self) -> bool:
        return self.state is WorkflowState.ABORTED

    @property
    def awaits_input(self) -> bool:
        return self.state in (
            WorkflowState.SELECT_MODE,
            WorkflowState.AWAIT_RUN_CONFIRM,
            WorkflowState.AWAIT_NUKE_CONFIRM,
        )

    @property
    def prompt(self) -> Optional[str]:
        """Question to show for the current state, or None if no input is expected."""
        key_mode = None if self.state is WorkflowState.SELECT_MODE else self.mode
        return PROMPTS.get((self.state, key_mode))

    @property
    def exit_code(self) -> int:
        return 1 if self.is_aborted else 0

    def advance(self, answer: Optional[str] = None) -> WorkflowState:
        self.state, self.mode = next_state(self.state, self.mode, answer)
        return self.state
