# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Error taxonomy shared by the tagging pipeline and the GitHub transport."""

from typing import Optional


class TaggerError(Exception):
    """Base class for every error raised by pr-tagger."""


class ValidationError(TaggerError):
    """Configuration is malformed. Raised before any remote call."""


class NotFoundError(TaggerError):
    """A referenced run, repository, commit or pull request does not exist."""


class TransientAPIError(TaggerError):
    """Network failure, rate limit or 5xx that outlived the transport retries."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubAPIError(TaggerError):
    """Any other non-success response on a read, e.g. bad credentials."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
