# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Rich tables for run output."""

from typing import Sequence

from rich import box
from rich.table import Table

from branchnuker.classes import Candidate, DeletionReport, RunConfig


def build_table(**kwargs) -> Table:
    params = {
        'box': box.MINIMAL_HEAVY_HEAD,
        'header_style': 'bold white',
        'border_style': 'grey50',
        'show_lines': False,
        'pad_edge': False,
    }
    params.update(kwargs)
    return Table(**params)


def build_candidate_table(candidates: Sequence[Candidate]) -> Table:
    table = build_table(title=f'{len(candidates)} stale branch candidate(s)')
    table.add_column('PR', justify='right', style='cyan', no_wrap=True)
    table.add_column('Branch', style='bold')
    table.add_column('Base', style='dim')
    table.add_column('Merged', style='dim', no_wrap=True)
    table.add_column('Age (months)', justify='right')
    table.add_column('Title', overflow='ellipsis', max_width=48)

    for candidate in candidates:
        table.add_row(
            f'#{candidate.number}',
            candidate.branch_name,
            candidate.base_branch_name,
            (candidate.merged_at or '')[:10],
            f'{candidate.age_months:.2f}',
            candidate.title,
        )
    return table


def build_report_table(report: DeletionReport) -> Table:
    table = build_table(title='Deletion results')
    table.add_column('PR', justify='right', style='cyan', no_wrap=True)
    table.add_column('Branch', style='bold')
    table.add_column('Result')

    for outcome in report.outcomes:
        result = '[green]deleted[/green]' if outcome.success else f'[red]failed[/red] [dim]{outcome.error}[/dim]'
        table.add_row(f'#{outcome.candidate.number}', outcome.candidate.branch_name, result)
    return table


def mask_token(token: str) -> str:
    if len(token) <= 8:
        return '*' * len(token)
    return f'{token[:4]}...{token[-4:]}'


def build_config_table(config: RunConfig) -> Table:
    table = build_table(show_header=True)
    table.add_column('Setting', style='cyan')
    table.add_column('Value', style='green')

    table.add_row('Repository', config.full_name)
    table.add_row('Token', mask_token(config.token))
    table.add_row('Age threshold (months)', str(config.age_threshold_months))
    table.add_row('Max candidates', str(config.max_candidates))
    table.add_row('Page size', str(config.page_size))
    table.add_row('Forbidden head refs', ', '.join(sorted(config.forbidden_head_refs)))
    table.add_row('Allowed base refs', ', '.join(sorted(config.allowed_base_refs)))
    table.add_row('Results file', config.output_path)
    return table
