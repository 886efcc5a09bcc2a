# Entrius 2025
# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = "https://api.github.com"
REQUEST_TIMEOUT_SECONDS = 30
MAX_REQUEST_ATTEMPTS = 3
RETRY_BACKOFF_BASE_SECONDS = 2  # 2s, 4s, ...
RETRYABLE_STATUS_CODES = (502, 503, 504)
MAX_PER_PAGE = 100  # GitHub REST ceiling for per_page

# =============================================================================
# Rate Limits
# =============================================================================
RATE_LIMIT_BUFFER_SECONDS = 5  # Extra buffer time when waiting for rate limit reset
RATE_LIMIT_MIN_REMAINING = 10  # Remaining requests below which a warning is logged
RATE_LIMIT_MAX_WAIT_SECONDS = 300  # Longest we sleep for a reset before giving up
RATE_LIMIT_DEFAULT_WAIT_SECONDS = 60  # Secondary rate limits without a reset header

# =============================================================================
# Run Scoping
# =============================================================================
DEFAULT_BASELINE_PAGE_SIZE = 10  # most recent successful runs considered as baseline
COMPARE_COMMITS_PAGE_SIZE = 100
COMMIT_FILES_PAGE_SIZE = 100
MAX_COMMIT_FILES_PAGES = 30  # GitHub caps a commit's file listing at 3000 files

# =============================================================================
# Summary
# =============================================================================
SUMMARY_HEADING_TEMPLATE = "Pull requests tagged with {tag}"
