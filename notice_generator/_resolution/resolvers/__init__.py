"""Metadata resolver implementations."""

from .github import GitHubResolver
from .go_import import GoImportResolver, canonical_name_and_repository, parse_go_import
from .npm_registry import NpmRegistryResolver

__all__ = [
    "GitHubResolver",
    "GoImportResolver",
    "NpmRegistryResolver",
    "canonical_name_and_repository",
    "parse_go_import",
]
