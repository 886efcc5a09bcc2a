# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for run summary rendering."""

from rich.console import Console

from prtagger.classes import RunReport
from prtagger.tagger.summary import build_summary_table, render_summary_markdown, write_step_summary


def _report(make_pr) -> RunReport:
    report = RunReport()
    report.add_entry(make_pr(123, author='octocat'))
    report.add_entry(make_pr(124, author=None))
    return report


class TestRenderSummaryMarkdown:
    def test_heading_and_rows(self, make_pr):
        markdown = render_summary_markdown(_report(make_pr), 'deployed')

        lines = markdown.splitlines()
        assert lines[0] == '## Pull requests tagged with deployed'
        assert '| Pull request | Author |' in lines
        assert '| [#123](https://github.com/your-owner/your-repo/pull/123) | @octocat |' in lines
        assert '| [#124](https://github.com/your-owner/your-repo/pull/124) | - |' in lines

    def test_empty_report_has_header_only(self):
        markdown = render_summary_markdown(RunReport(), 'deployed')

        assert '| --- | --- |' in markdown
        assert '[#' not in markdown


class TestWriteStepSummary:
    def test_appends(self, tmp_path):
        summary = tmp_path / 'summary.md'
        summary.write_text('existing\n')

        write_step_summary(str(summary), '## new\n')

        assert summary.read_text() == 'existing\n## new\n'


class TestBuildSummaryTable:
    def test_renders_rows(self, make_pr):
        console = Console(record=True, width=200)

        console.print(build_summary_table(_report(make_pr), 'deployed'))
        output = console.export_text()

        assert 'Pull requests tagged with deployed' in output
        assert '#123' in output
        assert '@octocat' in output
