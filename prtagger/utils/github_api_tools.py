# Entrius 2025
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from prtagger.classes import LabelUpdate, PullRequest, WorkflowRun
from prtagger.constants import (
    BASE_GITHUB_API_URL,
    COMMIT_FILES_PAGE_SIZE,
    COMPARE_COMMITS_PAGE_SIZE,
    MAX_COMMIT_FILES_PAGES,
    MAX_PER_PAGE,
    MAX_REQUEST_ATTEMPTS,
    RATE_LIMIT_BUFFER_SECONDS,
    RATE_LIMIT_DEFAULT_WAIT_SECONDS,
    RATE_LIMIT_MAX_WAIT_SECONDS,
    RATE_LIMIT_MIN_REMAINING,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BACKOFF_BASE_SECONDS,
    RETRYABLE_STATUS_CODES,
)
from prtagger.errors import GitHubAPIError, NotFoundError, TransientAPIError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimit:
    """The X-RateLimit-* headers of one response."""

    limit: int
    remaining: int
    reset_at: int  # unix timestamp

    @classmethod
    def from_response(cls, response: requests.Response) -> Optional['RateLimit']:
        """None when the response carries no (or unreadable) rate limit headers."""
        try:
            limit = int(response.headers.get('X-RateLimit-Limit', 0))
            remaining = int(response.headers.get('X-RateLimit-Remaining', 0))
            reset_at = int(response.headers.get('X-RateLimit-Reset', 0))
        except (TypeError, ValueError):
            return None
        if not limit and not reset_at:
            return None
        return cls(limit=limit, remaining=remaining, reset_at=reset_at)

    @property
    def seconds_until_reset(self) -> int:
        return max(0, self.reset_at - int(time.time()))


def rate_limit_wait(response: requests.Response) -> Optional[int]:
    """Seconds to wait before retrying a rate limited response.

    GitHub signals the primary limit with an exhausted X-RateLimit-Remaining
    and secondary limits with a 403/429 whose body mentions the rate limit,
    sometimes with Retry-After. Waits are capped at RATE_LIMIT_MAX_WAIT_SECONDS.

    Returns:
        Optional[int]: None if the response was not rate limited
    """
    if response.status_code not in (403, 429):
        return None

    rate_limit = RateLimit.from_response(response)
    if rate_limit and rate_limit.remaining == 0:
        return min(rate_limit.seconds_until_reset + RATE_LIMIT_BUFFER_SECONDS, RATE_LIMIT_MAX_WAIT_SECONDS)

    if 'rate limit' not in response.text.lower():
        return None
    retry_after = str(response.headers.get('Retry-After', ''))
    if retry_after.isdigit():
        return min(int(retry_after) + RATE_LIMIT_BUFFER_SECONDS, RATE_LIMIT_MAX_WAIT_SECONDS)
    return RATE_LIMIT_DEFAULT_WAIT_SECONDS


def make_headers(token: str) -> Dict[str, str]:
    """Build standard GitHub HTTP headers for a token.

    Args:
        token (str): GitHub token (workflow GITHUB_TOKEN or PAT)
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": "pr-tagger",
    }


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or ''
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    return response.reason or ''


class GitHubClient:
    """RepositoryHost backed by the GitHub REST API.

    Every call is retried on connection errors and 502/503/504 with exponential
    backoff, and waits out rate limits, up to ``max_attempts`` tries. Exhausted
    retries raise TransientAPIError.
    """

    def __init__(
        self,
        token: str,
        base_url: str = BASE_GITHUB_API_URL,
        max_attempts: int = MAX_REQUEST_ATTEMPTS,
        timeout: int = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(make_headers(token))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        context: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = f'{self.base_url}{path}'
        last_error = ''
        last_status: Optional[int] = None

        for attempt in range(self.max_attempts):
            is_last_attempt = attempt == self.max_attempts - 1
            try:
                response = self.session.request(method, url, params=params, json=payload, timeout=self.timeout)
            except requests.RequestException as e:
                last_error, last_status = str(e), None
                logger.warning(f"GitHub request for {context} failed (attempt {attempt + 1}/{self.max_attempts}): {e}")
                if not is_last_attempt:
                    time.sleep(RETRY_BACKOFF_BASE_SECONDS * (2**attempt))
                continue

            wait_seconds = rate_limit_wait(response)
            if wait_seconds is not None:
                last_error, last_status = 'rate limit exceeded', response.status_code
                if not is_last_attempt:
                    logger.warning(f"Rate limited on {context}, retrying in {wait_seconds}s")
                    time.sleep(wait_seconds)
                continue

            if response.status_code in RETRYABLE_STATUS_CODES:
                last_error, last_status = f'status {response.status_code}', response.status_code
                logger.warning(
                    f"GitHub returned {response.status_code} for {context} (attempt {attempt + 1}/{self.max_attempts})"
                )
                if not is_last_attempt:
                    time.sleep(RETRY_BACKOFF_BASE_SECONDS * (2**attempt))
                continue

            rate_limit = RateLimit.from_response(response)
            if rate_limit and rate_limit.remaining <= RATE_LIMIT_MIN_REMAINING:
                logger.warning(
                    f"Only {rate_limit.remaining}/{rate_limit.limit} GitHub API requests left, "
                    f"window resets in {rate_limit.seconds_until_reset}s"
                )
            return response

        raise TransientAPIError(
            f"GitHub request for {context} failed after {self.max_attempts} attempts: {last_error}",
            status_code=last_status,
        )

    def _get_json(self, path: str, context: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self._request('GET', path, context, params=params)
        self._raise_for_status(response, context)
        return response.json()

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        message = _error_message(response)
        if status == 404 or (status == 422 and 'no commit found' in message.lower()):
            raise NotFoundError(f"{context} not found: {message}")
        if status >= 500:
            raise TransientAPIError(f"GitHub returned {status} for {context}: {message}", status_code=status)
        raise GitHubAPIError(f"GitHub returned {status} for {context}: {message}", status_code=status)

    # ------------------------------------------------------------------
    # Workflow runs & repository
    # ------------------------------------------------------------------

    def get_workflow_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        data = self._get_json(f'/repos/{owner}/{repo}/actions/runs/{run_id}', f'workflow run {run_id}')
        return WorkflowRun.from_github_response(data)

    def get_repository_default_branch(self, owner: str, repo: str) -> str:
        data = self._get_json(f'/repos/{owner}/{repo}', f'repository {owner}/{repo}')
        if not isinstance(data, dict) or not data.get('default_branch'):
            raise GitHubAPIError(f"Unexpected response for repository {owner}/{repo}", status_code=200)
        return data['default_branch']

    def list_successful_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow_id: int,
        branch: str,
        page_size: int,
    ) -> List[WorkflowRun]:
        """List completed successful runs of a workflow on a branch, most recent first.

        Only the first page is read: ``page_size`` bounds how far back the
        baseline search looks.
        """
        data = self._get_json(
            f'/repos/{owner}/{repo}/actions/workflows/{workflow_id}/runs',
            f'workflow {workflow_id} runs',
            params={'branch': branch, 'status': 'success', 'per_page': min(page_size, MAX_PER_PAGE)},
        )
        return [WorkflowRun.from_github_response(run) for run in data.get('workflow_runs', [])]

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def compare_commits(self, owner: str, repo: str, base: str, head: str) -> List[str]:
        """Get the commits in base...head, oldest first.

        Args:
            owner (str): Repository owner
            repo (str): Repository name
            base (str): Exclusive lower bound sha
            head (str): Inclusive upper bound sha

        Returns:
            List[str]: Commit shas in the order GitHub reports them
        """
        shas: List[str] = []
        page = 1
        while True:
            data = self._get_json(
                f'/repos/{owner}/{repo}/compare/{base}...{head}',
                f'comparison {base[:7]}...{head[:7]}',
                params={'per_page': COMPARE_COMMITS_PAGE_SIZE, 'page': page},
            )
            commits = data.get('commits') or []
            shas.extend(commit['sha'] for commit in commits)

            total = data.get('total_commits', len(shas))
            if not commits or len(commits) < COMPARE_COMMITS_PAGE_SIZE or len(shas) >= total:
                return shas
            page += 1

    def get_commit_files(self, owner: str, repo: str, sha: str) -> List[str]:
        """Get the filenames changed by one commit, following file pagination."""
        filenames: List[str] = []
        for page in range(1, MAX_COMMIT_FILES_PAGES + 1):
            data = self._get_json(
                f'/repos/{owner}/{repo}/commits/{sha}',
                f'commit {sha}',
                params={'per_page': COMMIT_FILES_PAGE_SIZE, 'page': page},
            )
            files = data.get('files') or []
            filenames.extend(file['filename'] for file in files)
            if len(files) < COMMIT_FILES_PAGE_SIZE:
                break
        return filenames

    # ------------------------------------------------------------------
    # Pull requests & labels
    # ------------------------------------------------------------------

    def list_pull_requests_for_commit(self, owner: str, repo: str, sha: str) -> List[PullRequest]:
        data = self._get_json(f'/repos/{owner}/{repo}/commits/{sha}/pulls', f'pull requests for commit {sha}')
        return [PullRequest.from_github_response(pr) for pr in data]

    def update_issue_labels(self, owner: str, repo: str, issue_number: int, labels: Iterable[str]) -> LabelUpdate:
        """Replace the labels of an issue or pull request.

        A non-success status is returned, not raised, so the caller can record
        the failure and move on. Transport failures still raise.
        """
        response = self._request(
            'PATCH',
            f'/repos/{owner}/{repo}/issues/{issue_number}',
            f'issue #{issue_number} labels',
            payload={'labels': sorted(labels)},
        )
        if response.status_code >= 500:
            raise TransientAPIError(
                f"GitHub returned {response.status_code} updating issue #{issue_number}",
                status_code=response.status_code,
            )
        if response.status_code != 200:
            return LabelUpdate(status_code=response.status_code, reason=_error_message(response))

        data = response.json()
        return LabelUpdate(
            status_code=200,
            reason=response.reason or 'OK',
            labels=frozenset(label['name'] for label in data.get('labels') or []),
        )
