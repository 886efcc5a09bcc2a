import logging
import os
import sys
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from prtagger.classes import RunReport

LOGGER_NAME = 'prtagger'

# GitHub Actions workflow commands, see "Workflow commands for GitHub Actions"
ACTIONS_COMMANDS = {
    logging.DEBUG: 'debug',
    logging.WARNING: 'warning',
    logging.ERROR: 'error',
    logging.CRITICAL: 'error',
}


def running_in_actions() -> bool:
    return os.getenv('GITHUB_ACTIONS') == 'true'


def _escape_command_data(message: str) -> str:
    return message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


class ActionsFormatter(logging.Formatter):
    """Render records as workflow commands so warnings and errors become annotations."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = ACTIONS_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f'::{command}::{_escape_command_data(message)}'


def setup_logging(level: str = 'INFO', actions: Optional[bool] = None) -> logging.Logger:
    """Attach a single stdout handler to the package logger.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
        actions: Force workflow-command output on or off. Defaults to
            detecting the GITHUB_ACTIONS environment variable.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if actions is None:
        actions = running_in_actions()

    if actions:
        formatter: logging.Formatter = ActionsFormatter('%(message)s')
    else:
        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def log_run_report(report: 'RunReport', tag: str, dry_run: bool) -> None:
    """Log the tally of the tagging outcome and the pull requests it touched."""
    from prtagger.classes import TagStatus

    logger = logging.getLogger(LOGGER_NAME)
    mode = ' (dry run)' if dry_run else ''
    logger.info(
        f'Tagging with {tag} finished{mode}: '
        f'{report.count(TagStatus.TAGGED)} tagged | '
        f'{report.count(TagStatus.DRY_RUN_SKIPPED)} dry-run | '
        f'{report.count(TagStatus.ALREADY_QUEUED)} duplicate | '
        f'{report.count(TagStatus.NO_ASSOCIATED_PR)} without PR | '
        f'{report.count(TagStatus.FAILED)} failed'
    )
    if report.entries:
        numbers = ', '.join(f'#{number}' for number in report.pull_request_numbers)
        logger.info(f'Pull requests with {tag}{mode}: {numbers}')
