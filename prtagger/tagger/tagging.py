import logging
from typing import Iterable, List

from prtagger.classes import TagLedger, TagResult, TagStatus
from prtagger.errors import NotFoundError
from prtagger.utils.host import RepositoryHost

logger = logging.getLogger(__name__)


def tag_commit(
    host: RepositoryHost,
    owner: str,
    repo: str,
    sha: str,
    tag: str,
    dry_run: bool,
    ledger: TagLedger,
) -> TagResult:
    """Tag the pull request associated with one commit.

    Only the first pull request GitHub returns for the commit is considered;
    commits shared by several PRs (cherry-picks, stacked branches) tag just
    that one. Each PR number is processed at most once per ledger, whatever
    the outcome. A non-200 label update is recorded as FAILED and does not
    raise, and a NotFoundError from the lookup counts as no associated PR.
    TransientAPIError and any other GitHubAPIError from the lookup propagate
    and end the run.
    """
    try:
        pull_requests = host.list_pull_requests_for_commit(owner, repo, sha)
    except NotFoundError as e:
        logger.warning(f"Could not look up pull requests for commit {sha}: {e}")
        return ledger.record(TagResult(commit_sha=sha, status=TagStatus.NO_ASSOCIATED_PR, reason=str(e)))

    if not pull_requests:
        logger.info(f"No pull request found for commit {sha}")
        return ledger.record(TagResult(commit_sha=sha, status=TagStatus.NO_ASSOCIATED_PR))

    pull_request = pull_requests[0]
    if ledger.has_seen(pull_request.number):
        logger.debug(f"Pull request #{pull_request.number} already handled, skipping commit {sha}")
        return ledger.record(
            TagResult(commit_sha=sha, status=TagStatus.ALREADY_QUEUED, pull_request=pull_request)
        )
    ledger.mark_seen(pull_request.number)

    if dry_run:
        logger.info(f"Dry run: tagged pull request {pull_request.url} with {tag}")
        ledger.report.add_entry(pull_request)
        return ledger.record(
            TagResult(commit_sha=sha, status=TagStatus.DRY_RUN_SKIPPED, pull_request=pull_request)
        )

    update = host.update_issue_labels(owner, repo, pull_request.number, pull_request.with_label(tag))
    if not update.ok:
        reason = f"{update.status_code} {update.reason}".strip()
        logger.warning(f"Failed to update pull request {pull_request.url} with the new tag: {reason}")
        return ledger.record(
            TagResult(commit_sha=sha, status=TagStatus.FAILED, pull_request=pull_request, reason=reason)
        )

    logger.info(f"Successfully tagged pull request {pull_request.url} with {tag}")
    ledger.report.add_entry(pull_request)
    return ledger.record(TagResult(commit_sha=sha, status=TagStatus.TAGGED, pull_request=pull_request))


def tag_commits(
    host: RepositoryHost,
    owner: str,
    repo: str,
    shas: Iterable[str],
    tag: str,
    dry_run: bool,
    ledger: TagLedger,
) -> List[TagResult]:
    """Tag the pull requests behind each commit in order, sharing one ledger."""
    return [tag_commit(host, owner, repo, sha, tag, dry_run, ledger) for sha in shas]
