import logging
from dataclasses import dataclass
from typing import Optional

from prtagger.constants import DEFAULT_BASELINE_PAGE_SIZE
from prtagger.utils.host import RepositoryHost

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Baseline:
    """Last successful run before the current one. Both fields None if there is none."""

    sha: Optional[str] = None
    run_id: Optional[int] = None


def locate_baseline(
    host: RepositoryHost,
    owner: str,
    repo: str,
    workflow_id: int,
    branch: str,
    current_run_id: int,
    page_size: int = DEFAULT_BASELINE_PAGE_SIZE,
) -> Baseline:
    """Find the most recent successful run of the workflow on the branch.

    Args:
        host: Repository host to query
        owner: Repository owner
        repo: Repository name
        workflow_id: Workflow whose runs are considered
        branch: Effective branch of the current run
        current_run_id: Excluded from the candidates
        page_size: How many of the most recent successful runs to look at

    Returns:
        Baseline: the first remaining candidate, or an empty Baseline when
        this is the first successful run on the branch
    """
    runs = host.list_successful_workflow_runs(owner, repo, workflow_id, branch, page_size)
    candidates = [run for run in runs if run.id != current_run_id and run.head_sha]

    if not candidates:
        logger.info(f"No previous successful run of workflow {workflow_id} on {branch}")
        return Baseline()

    baseline = candidates[0]
    logger.info(f"Baseline is run {baseline.id} at {baseline.head_sha}")
    return Baseline(sha=baseline.head_sha, run_id=baseline.id)
