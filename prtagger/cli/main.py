# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
pr-tagger CLI - Main entry point

Every option falls back to the GitHub Actions input variable and then to the
environment variable the runner provides, so inside a workflow only --tag
has to be set.

Usage:
    pr-tagger --tag deployed-prod
    pr-tagger --tag deployed-prod --paths 'services/api/**,libs/**' --dry-run
    pr-tagger --repository owner/repo --workflow-run-id 1234 --tag rc --access-token ghp_xxx
"""

import logging
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console

from prtagger import __version__
from prtagger.config import RunOptions, parse_path_patterns, split_repository
from prtagger.constants import BASE_GITHUB_API_URL, DEFAULT_BASELINE_PAGE_SIZE
from prtagger.errors import ValidationError
from prtagger.tagger import run
from prtagger.tagger.summary import build_summary_table, render_summary_markdown, write_step_summary
from prtagger.utils.logging import setup_logging

console = Console()
logger = logging.getLogger('prtagger.cli')


def _require(value, option: str, envvar: str):
    if value in (None, ''):
        raise click.UsageError(f'Neither {option} nor env var {envvar} is set')
    return value


@click.command(name='pr-tagger')
@click.version_option(version=__version__, prog_name='pr-tagger')
@click.option(
    '--tag',
    envvar='INPUT_TAG',
    required=True,
    help='Label to add to every pull request included in the run',
)
@click.option(
    '--access-token',
    envvar=['INPUT_ACCESS-TOKEN', 'GITHUB_TOKEN'],
    default=None,
    help='GitHub token (falls back to GITHUB_TOKEN)',
)
@click.option(
    '--workflow-run-id',
    envvar=['INPUT_WORKFLOW-RUN-ID', 'GITHUB_RUN_ID'],
    type=int,
    default=None,
    help='Workflow run to tag (falls back to GITHUB_RUN_ID)',
)
@click.option(
    '--repository',
    envvar=['INPUT_REPOSITORY', 'GITHUB_REPOSITORY'],
    default=None,
    help='Repository in owner/repo format (falls back to GITHUB_REPOSITORY)',
)
@click.option(
    '--dry-run/--no-dry-run',
    envvar='INPUT_DRY-RUN',
    default=False,
    help='Log what would be tagged without updating any pull request',
)
@click.option(
    '--paths',
    envvar='INPUT_PATHS',
    default='',
    help='Comma or newline separated globs; commits since the last successful run touching them are tagged too',
)
@click.option(
    '--baseline-page-size',
    envvar='INPUT_BASELINE-PAGE-SIZE',
    type=int,
    default=DEFAULT_BASELINE_PAGE_SIZE,
    show_default=True,
    help='How many recent successful runs to search for the baseline',
)
@click.option(
    '--api-url',
    envvar='GITHUB_API_URL',
    default=BASE_GITHUB_API_URL,
    show_default=True,
    help='GitHub REST API root (for GitHub Enterprise Server)',
)
@click.option(
    '--summary-file',
    envvar='GITHUB_STEP_SUMMARY',
    default=None,
    type=click.Path(dir_okay=False),
    help='Append the run summary as markdown to this file (falls back to GITHUB_STEP_SUMMARY)',
)
@click.option(
    '--log-level',
    envvar='INPUT_LOG-LEVEL',
    default='INFO',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    help='Log verbosity',
)
def cli(
    tag: str,
    access_token: Optional[str],
    workflow_run_id: Optional[int],
    repository: Optional[str],
    dry_run: bool,
    paths: str,
    baseline_page_size: int,
    api_url: str,
    summary_file: Optional[str],
    log_level: str,
):
    """Tag the pull requests that went into a workflow run.

    The pull request of the run's head commit is always tagged. With --paths,
    every commit since the last successful run of the same workflow on the
    same branch that changed a matching file has its pull request tagged too.
    """
    setup_logging(log_level)

    access_token = _require(access_token, '--access-token', 'GITHUB_TOKEN')
    workflow_run_id = _require(workflow_run_id, '--workflow-run-id', 'GITHUB_RUN_ID')
    repository = _require(repository, '--repository', 'GITHUB_REPOSITORY')

    try:
        owner, repo = split_repository(repository)
        opts = RunOptions(
            owner=owner,
            repo=repo,
            github_token=access_token,
            workflow_run_id=workflow_run_id,
            tag=tag,
            dry_run=dry_run,
            paths=parse_path_patterns(paths),
            baseline_page_size=baseline_page_size,
            api_url=api_url,
        )
        report = run(opts)
    except ValidationError as e:
        logger.error(f'Invalid configuration: {e}')
        raise SystemExit(1)
    except Exception as e:
        logger.error(f'{e}', exc_info=True)
        raise SystemExit(1)

    console.print(build_summary_table(report, opts.tag))
    if summary_file:
        write_step_summary(summary_file, render_summary_markdown(report, opts.tag))


def main():
    """Main entry point for the CLI"""
    load_dotenv()
    cli()


if __name__ == '__main__':
    main()
