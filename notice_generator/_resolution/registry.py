"""Resolver registry for managing metadata resolver plugins."""

from typing import Any, Dict, List, Optional

import requests

from ..logging_config import logger
from ..models import Dependency
from .protocol import MetadataResolver


class ResolverRegistry:
    """
    Registry for managing and querying metadata resolvers.

    Example:
        registry = ResolverRegistry()
        registry.register(NpmRegistryResolver())
        registry.register(GitHubResolver(token))

        resolved = registry.resolve(dependency, session)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._resolvers: List[MetadataResolver] = []

    def register(self, resolver: MetadataResolver) -> None:
        """
        Register a metadata resolver.

        Args:
            resolver: MetadataResolver implementation to register
        """
        self._resolvers.append(resolver)
        logger.debug(f"Registered metadata resolver: {resolver.name} (priority={resolver.priority})")

    def get_resolver(self, dependency: Dependency) -> Optional[MetadataResolver]:
        """
        Get the highest priority resolver supporting a dependency.

        Args:
            dependency: Dependency to resolve

        Returns:
            Resolver with the lowest priority value, or None
        """
        applicable = [r for r in self._resolvers if r.supports(dependency)]
        if not applicable:
            return None
        return min(applicable, key=lambda r: r.priority)

    def resolve(self, dependency: Dependency, session: requests.Session) -> Dependency:
        """
        Resolve a dependency with its resolver.

        Dependencies no resolver supports are returned unchanged.

        Args:
            dependency: Dependency to resolve
            session: requests.Session with configured headers

        Returns:
            Resolved dependency

        Raises:
            ResolutionError: If the selected resolver fails
        """
        resolver = self.get_resolver(dependency)
        if resolver is None:
            logger.debug(f"No resolver for {dependency.name} ({dependency.ecosystem.value}), using scanned data")
            return dependency

        logger.info(f"Load {dependency.name} information from {resolver.name}")
        return resolver.resolve(dependency, session)

    def list_resolvers(self) -> List[Dict[str, Any]]:
        """
        List all registered resolvers with their priorities.

        Returns:
            List of dicts with 'name' and 'priority' keys
        """
        return [{"name": r.name, "priority": r.priority} for r in sorted(self._resolvers, key=lambda r: r.priority)]
