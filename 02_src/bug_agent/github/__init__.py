"""GitHub repository host module."""

from .client import EXCLUDED_PREFIXES, GitHubClient, IRepositoryHost, is_excluded

__all__ = ["GitHubClient", "IRepositoryHost", "EXCLUDED_PREFIXES", "is_excluded"]
