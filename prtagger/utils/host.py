# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Repository host interface consumed by the tagging pipeline."""

from __future__ import annotations

from typing import Iterable, List, Protocol

from prtagger.classes import LabelUpdate, PullRequest, WorkflowRun


class RepositoryHost(Protocol):
    def get_workflow_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        ...

    def get_repository_default_branch(self, owner: str, repo: str) -> str:
        ...

    def list_successful_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow_id: int,
        branch: str,
        page_size: int,
    ) -> List[WorkflowRun]:
        """Most recent first."""
        ...

    def compare_commits(self, owner: str, repo: str, base: str, head: str) -> List[str]:
        """Commit shas oldest first, excluding ``base`` and including ``head``."""
        ...

    def get_commit_files(self, owner: str, repo: str, sha: str) -> List[str]:
        ...

    def list_pull_requests_for_commit(self, owner: str, repo: str, sha: str) -> List[PullRequest]:
        ...

    def update_issue_labels(
        self, owner: str, repo: str, issue_number: int, labels: Iterable[str]
    ) -> LabelUpdate:
        ...
