"""Shared helpers for resolvers."""

import re
from typing import Optional, Tuple

# github.com/owner/repo in https, git+https, ssh (git@github.com:owner/repo) and scheme-less forms
_GITHUB_REPOSITORY_PATTERN = re.compile(r"github\.com[/:]([^/:#?\s]+)/([^/#?\s]+)", re.IGNORECASE)


def parse_github_repository(url: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Extract the owner/repository pair from a GitHub URL.

    Examples:
        "https://github.com/loafoe/mattermost-client#readme" -> ("loafoe", "mattermost-client")
        "git+https://github.com/stevemao/left-pad.git" -> ("stevemao", "left-pad")
        "github.com/golang/go" -> ("golang", "go")

    Args:
        url: Homepage or repository URL

    Returns:
        (owner, repository) tuple, or None if the URL is not a GitHub URL
    """
    if not url:
        return None

    match = _GITHUB_REPOSITORY_PATTERN.search(url)
    if not match:
        return None

    owner, repository = match.group(1), match.group(2)
    if repository.endswith(".git"):
        repository = repository[: -len(".git")]
    if not repository:
        return None
    return owner, repository


def is_github_url(url: Optional[str]) -> bool:
    """Check if a URL points at a GitHub repository."""
    return parse_github_repository(url) is not None
