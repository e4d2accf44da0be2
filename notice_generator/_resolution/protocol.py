"""MetadataResolver protocol for dependency metadata plugins."""

from typing import Protocol

import requests

from ..models import Dependency


class MetadataResolver(Protocol):
    """
    Protocol defining the interface for metadata resolver plugins.

    Each resolver fills in description, author, license and homepage for the
    dependencies of one ecosystem. Resolvers have priorities - lower numbers
    are tried first when several resolvers support a dependency.

    Example:
        class NpmRegistryResolver:
            name = "registry.npmjs.org"
            priority = 10

            def supports(self, dependency: Dependency) -> bool:
                return dependency.ecosystem == Ecosystem.NPM

            def resolve(self, dependency: Dependency, session: requests.Session) -> Dependency:
                # Fetch the package document and return an updated copy
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of this resolver.

        Used for logging. Examples: "registry.npmjs.org", "api.github.com"
        """
        ...

    @property
    def priority(self) -> int:
        """Priority of this resolver (lower = tried first)."""
        ...

    def supports(self, dependency: Dependency) -> bool:
        """
        Check if this resolver can resolve the given dependency.

        Args:
            dependency: Dependency discovered by a manifest scanner

        Returns:
            True if this resolver handles the dependency's ecosystem/host
        """
        ...

    def resolve(self, dependency: Dependency, session: requests.Session) -> Dependency:
        """
        Resolve metadata for a dependency.

        Implementations must:
        1. Leave the dependency's ``name`` unchanged (it keys the fragment)
        2. Return a new Dependency instead of mutating the argument
        3. Tolerate missing optional fields (leave them empty)
        4. Raise ResolutionError when the remote lookup itself fails

        Args:
            dependency: Dependency to resolve
            session: requests.Session with the default User-Agent

        Returns:
            Dependency with the resolved fields filled in

        Raises:
            ResolutionError: If the remote service cannot be queried
        """
        ...
