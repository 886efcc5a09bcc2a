# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for logging setup and GitHub Actions workflow command output."""

import logging

from prtagger.classes import PullRequest, RunReport, TagResult, TagStatus
from prtagger.utils.logging import LOGGER_NAME, ActionsFormatter, log_run_report, setup_logging


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord('prtagger.test', level, __file__, 1, message, None, None)


class TestActionsFormatter:
    def test_warning_becomes_annotation(self):
        assert ActionsFormatter('%(message)s').format(_record(logging.WARNING, 'careful')) == '::warning::careful'

    def test_error_escapes_newlines(self):
        formatted = ActionsFormatter('%(message)s').format(_record(logging.ERROR, 'boom\nat line 2'))

        assert formatted == '::error::boom%0Aat line 2'

    def test_info_is_plain(self):
        assert ActionsFormatter('%(message)s').format(_record(logging.INFO, 'hello')) == 'hello'


class TestSetupLogging:
    def test_single_handler(self):
        setup_logging('DEBUG', actions=False)
        logger = setup_logging('DEBUG', actions=False)

        assert logger.name == LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert not isinstance(logger.handlers[0].formatter, ActionsFormatter)

    def test_actions_detected_from_environment(self, monkeypatch):
        monkeypatch.setenv('GITHUB_ACTIONS', 'true')

        logger = setup_logging()

        assert isinstance(logger.handlers[0].formatter, ActionsFormatter)


class TestLogRunReport:
    def test_tally(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        report = RunReport(
            results=[
                TagResult(commit_sha='a', status=TagStatus.TAGGED),
                TagResult(commit_sha='b', status=TagStatus.NO_ASSOCIATED_PR),
            ]
        )

        log_run_report(report, 'rc', dry_run=False)

        assert caplog.messages == [
            'Tagging with rc finished: 1 tagged | 0 dry-run | 0 duplicate | 1 without PR | 0 failed'
        ]

    def test_lists_touched_pull_requests(self, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        report = RunReport()
        report.add_entry(PullRequest(number=7, url='u7'))
        report.add_entry(PullRequest(number=9, url='u9'))

        log_run_report(report, 'rc', dry_run=True)

        assert caplog.messages[-1] == 'Pull requests with rc (dry run): #7, #9'
