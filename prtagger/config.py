# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Run configuration and its validation."""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from prtagger.constants import BASE_GITHUB_API_URL, DEFAULT_BASELINE_PAGE_SIZE, MAX_PER_PAGE
from prtagger.errors import ValidationError

REPO_PATTERN = re.compile(r'^[a-zA-Z0-9._-]+/[a-zA-Z0-9._-]+$')
PATH_SEPARATORS = re.compile(r'[,\n]')


def parse_path_patterns(raw: str) -> List[str]:
    """Split a comma or newline separated pattern list. Blank entries are dropped."""
    if not raw:
        return []
    return [pattern.strip() for pattern in PATH_SEPARATORS.split(raw) if pattern.strip()]


def split_repository(full_name: str) -> Tuple[str, str]:
    """Split ``owner/repo`` into its parts.

    Raises ValidationError if the value is not in owner/repo format.
    """
    full_name = (full_name or '').strip()
    if not REPO_PATTERN.match(full_name):
        raise ValidationError(f"Repository must be in owner/repo format (got '{full_name}')")
    owner, repo = full_name.split('/', 1)
    return owner, repo


@dataclass
class RunOptions:
    """Everything one tagging run needs."""

    owner: str
    repo: str
    github_token: str
    workflow_run_id: int
    tag: str
    dry_run: bool = False
    paths: List[str] = field(default_factory=list)
    baseline_page_size: int = DEFAULT_BASELINE_PAGE_SIZE
    api_url: str = BASE_GITHUB_API_URL

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def validate(self) -> 'RunOptions':
        if not self.tag or not self.tag.strip():
            raise ValidationError('A tag is required')
        if not self.github_token:
            raise ValidationError('A GitHub token is required')
        if not self.owner or not self.repo:
            raise ValidationError('Repository owner and name are required')
        if self.workflow_run_id is None or self.workflow_run_id <= 0:
            raise ValidationError(f'Workflow run id must be a positive integer (got {self.workflow_run_id})')
        if not 1 <= self.baseline_page_size <= MAX_PER_PAGE:
            raise ValidationError(
                f'Baseline page size must be between 1 and {MAX_PER_PAGE} (got {self.baseline_page_size})'
            )
        if not self.api_url.startswith(('https://', 'http://')):
            raise ValidationError(f'API URL must be an http(s) URL (got {self.api_url})')
        self.tag = self.tag.strip()
        return self
