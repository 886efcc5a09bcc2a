# The MIT License (MIT)
# Copyright © 2025 Entrius

import logging
from typing import List, Optional

from prtagger.classes import RunReport, TagLedger
from prtagger.config import RunOptions
from prtagger.tagger.baseline import locate_baseline
from prtagger.tagger.commits import fetch_commit_range, filter_commits_by_paths
from prtagger.tagger.context import resolve_run_context
from prtagger.tagger.tagging import tag_commits
from prtagger.utils.github_api_tools import GitHubClient
from prtagger.utils.host import RepositoryHost
from prtagger.utils.logging import log_run_report

logger = logging.getLogger(__name__)


def run(opts: RunOptions, host: Optional[RepositoryHost] = None) -> RunReport:
    """Tag every pull request that contributed to one workflow run.

    The head commit's pull request is always tagged. When path patterns are
    configured, every commit since the last successful run of the same
    workflow on the same branch that touched a matching path is tagged too.

    Args:
        opts: Run configuration, validated before any remote call
        host: Repository host; a GitHubClient for ``opts`` when omitted

    Returns:
        RunReport: pull requests tagged (or dry-run tagged) by this run

    Raises:
        ValidationError: malformed configuration
        NotFoundError: the workflow run or repository does not exist
        TransientAPIError: the GitHub API stayed unavailable
    """
    opts.validate()
    if host is None:
        host = GitHubClient(opts.github_token, base_url=opts.api_url)

    context = resolve_run_context(host, opts.owner, opts.repo, opts.workflow_run_id)
    ledger = TagLedger()
    logger.info(f"Tagging pull requests of workflow run {context.run.id} {context.run.html_url or ''}".rstrip())
    if not context.run.head_branch:
        logger.info(f"Run has no head branch, using default branch {context.default_branch}")

    head_sha = context.head_sha
    if not head_sha:
        logger.info(f"Workflow run {context.run.id} has no head commit, nothing to tag")
        return ledger.report

    qualifying: List[str] = [head_sha]
    if opts.paths:
        baseline = locate_baseline(
            host,
            opts.owner,
            opts.repo,
            context.run.workflow_id,
            context.branch,
            context.run.id,
            page_size=opts.baseline_page_size,
        )
        commit_range = fetch_commit_range(host, opts.owner, opts.repo, baseline.sha, head_sha)
        filtered = filter_commits_by_paths(host, opts.owner, opts.repo, commit_range.shas, opts.paths)
        qualifying.extend(sha for sha in filtered if sha != head_sha)
    else:
        logger.debug("No path filter configured, only the head commit is considered")

    tag_commits(host, opts.owner, opts.repo, qualifying, opts.tag, opts.dry_run, ledger)
    log_run_report(ledger.report, opts.tag, opts.dry_run)
    return ledger.report
