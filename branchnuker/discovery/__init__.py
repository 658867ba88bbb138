# The MIT License (MIT)
# Copyright © 2025 Entrius

from .age import months_since, parse_github_timestamp
from .filters import filter_pull_requests
from .paginator import collect_candidates

__all__ = ['months_since', 'parse_github_timestamp', 'filter_pull_requests', 'collect_candidates']
