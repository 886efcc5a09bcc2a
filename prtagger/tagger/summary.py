"""Human-readable run summary: GitHub step summary markdown and a console table."""

import logging
from pathlib import Path
from typing import List

from rich import box
from rich.table import Table

from prtagger.classes import RunReport
from prtagger.constants import SUMMARY_HEADING_TEMPLATE

logger = logging.getLogger(__name__)


def _author_display(author) -> str:
    return f'@{author}' if author else '-'


def render_summary_markdown(report: RunReport, tag: str) -> str:
    """Heading plus a two column table of pull request link and author."""
    lines: List[str] = [
        f'## {SUMMARY_HEADING_TEMPLATE.format(tag=tag)}',
        '',
        '| Pull request | Author |',
        '| --- | --- |',
    ]
    for pull_request, author in report.entries:
        lines.append(f'| [#{pull_request.number}]({pull_request.url}) | {_author_display(author)} |')
    lines.append('')
    return '\n'.join(lines) + '\n'


def write_step_summary(path: str, markdown: str) -> None:
    """Append to the job summary file (GITHUB_STEP_SUMMARY)."""
    with Path(path).open('a', encoding='utf-8') as handle:
        handle.write(markdown)
    logger.debug(f"Wrote run summary to {path}")


def build_summary_table(report: RunReport, tag: str) -> Table:
    table = Table(
        title=SUMMARY_HEADING_TEMPLATE.format(tag=tag),
        box=box.MINIMAL_HEAVY_HEAD,
        header_style='bold white',
        show_header=True,
    )
    table.add_column('Pull request', style='cyan')
    table.add_column('Author', style='yellow')
    for pull_request, author in report.entries:
        table.add_row(f'#{pull_request.number} {pull_request.url}', _author_display(author))
    return table
