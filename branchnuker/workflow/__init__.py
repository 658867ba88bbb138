# The MIT License (MIT)
# Copyright © 2025 Entrius

from .confirmation import ConfirmationWorkflow, WorkflowState, next_state, parse_mode
from .deletion import delete_candidates, log_dry_run

__all__ = [
    'ConfirmationWorkflow',
    'WorkflowState',
    'next_state',
    'parse_mode',
    'delete_candidates',
    'log_dry_run',
]
