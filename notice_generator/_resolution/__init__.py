"""Metadata resolution for discovered dependencies.

Resolution happens in two stages:

1. Go module paths are mapped to repositories with go-import discovery
   (``GoImportResolver.resolve_all``).
2. Every dependency is resolved by the resolver registered for its
   ecosystem (npm registry for package.json, GitHub API for go.mod and
   Pipfile), then its license file is looked up on GitHub.

Example usage:
    from notice_generator._resolution import create_default_registry

    registry = create_default_registry(github_token)
    dependency = registry.resolve(dependency, session)
"""

from typing import Optional

from .license_text import LICENSE_FILE_CANDIDATES, LicenseTextFetcher
from .protocol import MetadataResolver
from .registry import ResolverRegistry
from .resolvers import GitHubResolver, GoImportResolver, NpmRegistryResolver
from .utils import is_github_url, parse_github_repository


def create_default_registry(github_token: Optional[str] = None) -> ResolverRegistry:
    """
    Create a ResolverRegistry with the default resolvers.

    - NpmRegistryResolver (10) - npm dependencies
    - GitHubResolver (20) - Go module and Pipfile dependencies hosted on GitHub

    Args:
        github_token: Optional GitHub API token

    Returns:
        Configured ResolverRegistry
    """
    registry = ResolverRegistry()
    registry.register(NpmRegistryResolver())
    registry.register(GitHubResolver(token=github_token))
    return registry


__all__ = [
    "create_default_registry",
    "GitHubResolver",
    "GoImportResolver",
    "LicenseTextFetcher",
    "LICENSE_FILE_CANDIDATES",
    "MetadataResolver",
    "NpmRegistryResolver",
    "ResolverRegistry",
    "is_github_url",
    "parse_github_repository",
]
