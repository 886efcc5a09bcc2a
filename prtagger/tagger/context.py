import logging
from dataclasses import dataclass
from typing import Optional

from prtagger.classes import WorkflowRun
from prtagger.utils.host import RepositoryHost

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunContext:
    """The workflow run being tagged and the branch its history is scoped to"""

    run: WorkflowRun
    default_branch: str
    branch: str

    @property
    def head_sha(self) -> Optional[str]:
        return self.run.head_sha


def resolve_run_context(host: RepositoryHost, owner: str, repo: str, run_id: int) -> RunContext:
    """Load a workflow run and pick its effective branch.

    The effective branch is the run's head branch, or the repository default
    branch when the run has none (e.g. tag pushes).

    Raises:
        NotFoundError: the run or the repository does not exist
        TransientAPIError: network or rate limit failure
    """
    run = host.get_workflow_run(owner, repo, run_id)
    default_branch = host.get_repository_default_branch(owner, repo)
    branch = run.head_branch or default_branch

    logger.debug(
        f"Workflow run {run.id} (workflow {run.workflow_id}) on branch {branch} "
        f"at {run.head_sha or 'no head commit'}"
    )
    return RunContext(run=run, default_branch=default_branch, branch=branch)
