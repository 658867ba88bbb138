# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
branchnuker CLI - Main entry point

Usage:
    branchnuker run [--env-file PATH] [--output PATH] [-v]
    branchnuker config [--env-file PATH]

Configuration is read from the environment (and a .env file):
    OWNER, REPO, GITHUB_TOKEN      required
    AGE_IN_MONTHS                  default 3
    MAX_COUNT                      default 100
    PER_PAGE_COUNT                 default 30
    FORBIDDEN_HEAD_REFS            default master,staging
    ALLOWED_BASE_REFS              default master
    RESULTS_PATH                   default merged-prs.json
"""

import click
from rich.console import Console
from rich.panel import Panel

from branchnuker import __version__
from branchnuker.classes import Mode, RunConfig
from branchnuker.cli.tables import build_candidate_table, build_config_table, build_report_table
from branchnuker.config import load_env_file, load_run_config
from branchnuker.errors import ConfigurationError, GitHubAPIError
from branchnuker.runner import CleanupRun, RunResult
from branchnuker.utils.github_api_tools import GitHubClient
from branchnuker.utils.logging import setup_logging

console = Console()


def ask_operator(question: str) -> str:
    """Prompt on the terminal; an empty answer is returned as ''."""
    return click.prompt(question, default='', show_default=False)


def _load_config_or_exit(ctx: click.Context, env_file: str, output: str = None) -> RunConfig:
    load_env_file(env_file)
    try:
        return load_run_config(output_path=output)
    except ConfigurationError as e:
        console.print(f'[red]Error: {e}[/red]')
        ctx.exit(1)


def print_banner(config: RunConfig) -> None:
    console.print(
        Panel(
            f'[cyan]Repository:[/cyan] {config.full_name}\n'
            f'[cyan]Older than:[/cyan] {config.age_threshold_months} months\n'
            f'[cyan]Base refs:[/cyan] {", ".join(sorted(config.allowed_base_refs))}\n'
            f'[cyan]Protected heads:[/cyan] {", ".join(sorted(config.forbidden_head_refs))}\n'
            f'[cyan]Max candidates:[/cyan] {config.max_candidates}',
            title=f'branchnuker v{__version__}',
            border_style='blue',
        )
    )


def print_summary(result: RunResult, config: RunConfig) -> None:
    if result.discovery is not None:
        if result.candidates:
            console.print(build_candidate_table(result.candidates))
        console.print(f'[dim]Results written to {config.output_path}[/dim]')

    if result.report is not None:
        console.print(build_report_table(result.report))
        console.print(f'  [green]Deleted: {result.report.succeeded}[/green]')
        if result.report.failed:
            console.print(f'  [red]Failed:  {result.report.failed}[/red]')
    elif result.mode is Mode.DRYRUN and result.discovery is not None:
        console.print(f'\n[cyan]Dry run complete.[/cyan] {len(result.candidates)} branch(es) would be removed.')


@click.group()
@click.version_option(version=__version__, prog_name='branchnuker')
def cli():
    """branchnuker - delete branches of long-merged pull requests"""
    pass


@cli.command('run')
@click.option('--env-file', default=None, type=click.Path(dir_okay=False), help='Path to a .env file')
@click.option('--output', '-o', default=None, help='Where to write the candidate list (overrides RESULTS_PATH)')
@click.option('--verbose', '-v', is_flag=True, help='Log every filter decision')
@click.pass_context
def run_command(ctx: click.Context, env_file: str, output: str, verbose: bool):
    """
    Find branches of merged PRs older than AGE_IN_MONTHS and optionally delete them.

    \b
    Two modes:
        DRYRUN    (default) only logs what would be removed
        NUKE      deletes the branches after two typed confirmations
    """
    setup_logging(verbose=verbose, console=console)
    config = _load_config_or_exit(ctx, env_file, output)
    print_banner(config)

    client = GitHubClient(config.owner, config.repo, config.token)
    try:
        result = CleanupRun(config=config, client=client, ask=ask_operator).execute()
    except GitHubAPIError as e:
        console.print(f'[red]GitHub API error: {e}[/red]')
        ctx.exit(1)

    print_summary(result, config)
    ctx.exit(result.exit_code)


@cli.command('config')
@click.option('--env-file', default=None, type=click.Path(dir_okay=False), help='Path to a .env file')
@click.pass_context
def config_command(ctx: click.Context, env_file: str):
    """Show the resolved run configuration."""
    config = _load_config_or_exit(ctx, env_file)
    console.print('\n[bold]branchnuker configuration[/bold]\n')
    console.print(build_config_table(config))


def main():
    """Main entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
