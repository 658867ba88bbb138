# The MIT License (MIT)
# Copyright © 2025 Entrius

# =============================================================================
# General
# =============================================================================
SECONDS_PER_DAY = 86400
SECONDS_PER_MONTH = 30 * SECONDS_PER_DAY  # 2,592,000

# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = 'https://api.github.com'
GITHUB_API_TIMEOUT = 30
RATE_LIMIT_MIN_REMAINING = 10  # warn when fewer requests than this remain

# =============================================================================
# Run defaults
# =============================================================================
DEFAULT_AGE_IN_MONTHS = 3
DEFAULT_MAX_COUNT = 100
DEFAULT_PER_PAGE_COUNT = 30
DEFAULT_RESULTS_PATH = 'merged-prs.json'

# Long-lived branches that must never be deleted, even if reported as a PR head
DEFAULT_FORBIDDEN_HEAD_REFS = ('master', 'staging')
# Only PRs merged into these branches are considered
DEFAULT_ALLOWED_BASE_REFS = ('master',)

REQUIRED_ENV_VARS = ('OWNER', 'REPO', 'GITHUB_TOKEN')

# =============================================================================
# Confirmation tokens
# =============================================================================
RUN_CONFIRMATION = 'YES I DO'
NUKE_CONFIRMATION = 'NUKE'
