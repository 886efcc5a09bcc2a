from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple


class TagStatus(Enum):
    """Terminal outcome of processing one qualifying commit"""

    TAGGED = "TAGGED"
    DRY_RUN_SKIPPED = "DRY_RUN_SKIPPED"
    ALREADY_QUEUED = "ALREADY_QUEUED"
    FAILED = "FAILED"
    NO_ASSOCIATED_PR = "NO_ASSOCIATED_PR"


@dataclass(frozen=True)
class WorkflowRun:
    """One GitHub Actions workflow run"""

    id: int
    workflow_id: int
    head_branch: Optional[str] = None
    head_sha: Optional[str] = None  # None for runs not associated with a commit yet
    html_url: Optional[str] = None

    @classmethod
    def from_github_response(cls, run: Dict[str, Any]) -> 'WorkflowRun':
        """Create WorkflowRun from a GitHub Actions run payload"""
        head_commit = run.get('head_commit') or {}
        return cls(
            id=run['id'],
            workflow_id=run['workflow_id'],
            head_branch=run.get('head_branch') or None,
            head_sha=head_commit.get('id') or run.get('head_sha') or None,
            html_url=run.get('html_url'),
        )


@dataclass(frozen=True)
class Commit:
    """A commit and, once fetched, the paths it changed"""

    sha: str
    files: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CommitRange:
    """Commits after ``base_sha`` up to and including ``head_sha``, oldest first."""

    head_sha: str
    shas: Tuple[str, ...]
    base_sha: Optional[str] = None

    def __len__(self) -> int:
        return len(self.shas)


@dataclass(frozen=True)
class PullRequest:
    """A pull request as returned by the commits/{sha}/pulls listing"""

    number: int
    url: str
    labels: FrozenSet[str] = frozenset()
    author: Optional[str] = None

    def with_label(self, tag: str) -> FrozenSet[str]:
        """Label set after tagging. A set union, so applying twice is a no-op."""
        return self.labels | {tag}

    @classmethod
    def from_github_response(cls, pr: Dict[str, Any]) -> 'PullRequest':
        """Create PullRequest from GitHub API response"""
        user = pr.get('user') or {}
        return cls(
            number=pr['number'],
            url=pr.get('html_url') or pr.get('url') or '',
            labels=frozenset(label['name'] for label in pr.get('labels') or []),
            author=user.get('login'),
        )


@dataclass(frozen=True)
class LabelUpdate:
    """Response of an issue label update. Non-success statuses are soft failures."""

    status_code: int
    reason: str = ''
    labels: FrozenSet[str] = frozenset()

    @property
    def ok(self) -> bool:
        return self.status_code == 200


@dataclass(frozen=True)
class TagResult:
    """Outcome of tagging the pull request behind one commit"""

    commit_sha: str
    status: TagStatus
    pull_request: Optional[PullRequest] = None
    reason: Optional[str] = None


@dataclass
class RunReport:
    """Pull requests touched by this invocation, used for the run summary.

    ``entries`` holds (pull request, author) pairs for every PR that was tagged
    or would have been tagged in dry run. ``results`` keeps every TagResult,
    including the ones that never reach the summary.
    """

    entries: List[Tuple[PullRequest, Optional[str]]] = field(default_factory=list)
    results: List[TagResult] = field(default_factory=list)

    def add_entry(self, pull_request: PullRequest) -> None:
        self.entries.append((pull_request, pull_request.author))

    def count(self, status: TagStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def pull_request_numbers(self) -> List[int]:
        return [pr.number for pr, _ in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class TagLedger:
    """Accumulator passed down the tagging stage.

    Guards the one-update-per-PR rule for a single invocation and collects
    the report. Owned by the caller so every stage sees the same instance.
    """

    tagged_numbers: Set[int] = field(default_factory=set)
    report: RunReport = field(default_factory=RunReport)

    def has_seen(self, number: int) -> bool:
        return number in self.tagged_numbers

    def mark_seen(self, number: int) -> None:
        self.tagged_numbers.add(number)

    def record(self, result: TagResult) -> TagResult:
        self.report.results.append(result)
        return result
