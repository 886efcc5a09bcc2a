import logging
from typing import List, Optional, Sequence

from prtagger.classes import Commit, CommitRange
from prtagger.errors import NotFoundError
from prtagger.utils.host import RepositoryHost
from prtagger.utils.patterns import path_matches_any

logger = logging.getLogger(__name__)


def fetch_commit_range(
    host: RepositoryHost,
    owner: str,
    repo: str,
    base_sha: Optional[str],
    head_sha: str,
) -> CommitRange:
    """Commits after the baseline up to and including the head, oldest first.

    Without a baseline only the head commit is returned: history with no lower
    bound is not enumerated.
    """
    if base_sha is None:
        logger.info(f"No baseline commit, scoping the run to head commit {head_sha}")
        return CommitRange(head_sha=head_sha, shas=(head_sha,))

    shas = host.compare_commits(owner, repo, base_sha, head_sha)
    logger.info(f"{len(shas)} commit(s) between {base_sha} and {head_sha}")
    return CommitRange(head_sha=head_sha, shas=tuple(shas), base_sha=base_sha)


def filter_commits_by_paths(
    host: RepositoryHost,
    owner: str,
    repo: str,
    shas: Sequence[str],
    patterns: Sequence[str],
) -> List[str]:
    """Keep the commits that changed at least one file matching any pattern.

    One file listing per commit. A commit that no longer exists is skipped;
    TransientAPIError and any other GitHubAPIError abort the whole pass.

    Returns:
        List[str]: qualifying shas in their original order
    """
    if not patterns:
        return []

    qualifying: List[str] = []
    for sha in shas:
        try:
            commit = Commit(sha=sha, files=tuple(host.get_commit_files(owner, repo, sha)))
        except NotFoundError as e:
            logger.warning(f"Skipping commit {sha}: {e}")
            continue

        matched = [filename for filename in commit.files if path_matches_any(filename, patterns)]
        if matched:
            logger.debug(f"Commit {sha} matches path filter via {matched[0]}")
            qualifying.append(sha)
        else:
            logger.debug(f"Commit {sha} changed no files matching {list(patterns)}")

    logger.info(f"{len(qualifying)}/{len(shas)} commit(s) touched the filtered paths")
    return qualifying
