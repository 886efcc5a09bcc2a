#!/usr/bin/env python3
# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared fixtures: an in-memory repository host that records every call.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from prtagger.classes import LabelUpdate, PullRequest, WorkflowRun
from prtagger.config import RunOptions
from prtagger.errors import NotFoundError, TransientAPIError
from prtagger.utils.logging import LOGGER_NAME

UPDATE_REASONS = {403: 'Forbidden', 404: 'Not Found', 422: 'Unprocessable Entity'}

OWNER = 'your-owner'
REPO = 'your-repo'


class FakeHost:
    """RepositoryHost double. Unknown lookups raise NotFoundError like GitHub's 404."""

    def __init__(self):
        self.runs: Dict[int, WorkflowRun] = {}
        self.default_branch = 'main'
        self.successful_runs: List[WorkflowRun] = []
        self.comparisons: Dict[Tuple[str, str], List[str]] = {}
        self.commit_files: Dict[str, List[str]] = {}
        self.pulls: Dict[str, List[PullRequest]] = {}
        self.update_status = 200
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Tuple] = []

    def _maybe_raise(self, key: str) -> None:
        if key in self.errors:
            raise self.errors[key]

    def calls_to(self, name: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == name]

    def get_workflow_run(self, owner, repo, run_id) -> WorkflowRun:
        self.calls.append(('get_workflow_run', run_id))
        if run_id not in self.runs:
            raise NotFoundError(f'workflow run {run_id} not found')
        return self.runs[run_id]

    def get_repository_default_branch(self, owner, repo) -> str:
        self.calls.append(('get_repository_default_branch', owner, repo))
        return self.default_branch

    def list_successful_workflow_runs(self, owner, repo, workflow_id, branch, page_size) -> List[WorkflowRun]:
        self.calls.append(('list_successful_workflow_runs', workflow_id, branch, page_size))
        return self.successful_runs[:page_size]

    def compare_commits(self, owner, repo, base, head) -> List[str]:
        self.calls.append(('compare_commits', base, head))
        self._maybe_raise(f'compare:{base}')
        if (base, head) not in self.comparisons:
            raise NotFoundError(f'comparison {base}...{head} not found')
        return list(self.comparisons[(base, head)])

    def get_commit_files(self, owner, repo, sha) -> List[str]:
        self.calls.append(('get_commit_files', sha))
        self._maybe_raise(f'files:{sha}')
        if sha not in self.commit_files:
            raise NotFoundError(f'commit {sha} not found')
        return list(self.commit_files[sha])

    def list_pull_requests_for_commit(self, owner, repo, sha) -> List[PullRequest]:
        self.calls.append(('list_pull_requests_for_commit', sha))
        self._maybe_raise(f'pulls:{sha}')
        return list(self.pulls.get(sha, []))

    def update_issue_labels(self, owner, repo, issue_number, labels: Iterable[str]) -> LabelUpdate:
        labels = frozenset(labels)
        self.calls.append(('update_issue_labels', issue_number, labels))
        if self.update_status >= 500:
            raise TransientAPIError(f'update labels of #{issue_number}', status_code=self.update_status)
        if self.update_status != 200:
            return LabelUpdate(status_code=self.update_status, reason=UPDATE_REASONS.get(self.update_status, ''))
        return LabelUpdate(status_code=200, reason='OK', labels=labels)


def _make_pr(number: int = 123, labels: Iterable[str] = (), author: Optional[str] = 'octocat') -> PullRequest:
    return PullRequest(
        number=number,
        url=f'https://github.com/{OWNER}/{REPO}/pull/{number}',
        labels=frozenset(labels),
        author=author,
    )


@pytest.fixture(autouse=True)
def restore_package_logger():
    """setup_logging() detaches the package logger from root; undo it so caplog keeps working."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, propagate, level = list(logger.handlers), logger.propagate, logger.level
    yield
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def opts():
    return RunOptions(
        owner=OWNER,
        repo=REPO,
        github_token='your-token',
        workflow_run_id=1234,
        tag='your-tag',
        dry_run=False,
        paths=['path/to/your/file'],
    )


@pytest.fixture
def current_run():
    return WorkflowRun(id=1234, workflow_id=1234, head_branch=None, head_sha='commit-id')


@pytest.fixture
def make_pr():
    """Factory for pull requests in the fixture repository."""
    return _make_pr
