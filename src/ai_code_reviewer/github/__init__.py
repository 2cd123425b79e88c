"""
GitHub Integration Layer

This module provides GitHub API integration for PR metadata and
diff retrieval, and parsing of unified diffs.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .diff_source import DiffSource
from .parser import DiffParser, DiffParseError, InvalidRepositoryError, parse_repository_url

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'RateLimitExceeded',
    'DiffSource',
    'DiffParser',
    'DiffParseError',
    'InvalidRepositoryError',
    'parse_repository_url',
]
