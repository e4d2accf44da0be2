"""npm registry resolver for package.json dependencies."""

import json
from dataclasses import replace
from typing import Any, Dict

import requests

from ...exceptions import ResolutionError
from ...http_client import DEFAULT_TIMEOUT
from ...logging_config import logger
from ...models import Dependency, DependencyAuthor, DependencyRepository, Ecosystem

NPM_REGISTRY_URL = "https://registry.npmjs.org"


def _optional_string(data: Dict[str, Any], key: str, package_name: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ResolutionError(f"Unexpected {type(value).__name__} for '{key}' in npm metadata of {package_name}")
    return value


def _promote_author(raw: Any, package_name: str) -> DependencyAuthor:
    """Author is an object in most packages, a plain "Name <email>" string in older ones."""
    if raw is None:
        return DependencyAuthor()
    if isinstance(raw, str):
        return DependencyAuthor(name=raw)
    if isinstance(raw, dict):
        return DependencyAuthor(
            name=_optional_string(raw, "name", package_name),
            email=_optional_string(raw, "email", package_name),
        )
    raise ResolutionError(f"Unexpected {type(raw).__name__} for 'author' in npm metadata of {package_name}")


def _promote_repository(raw: Any, package_name: str) -> DependencyRepository:
    """Repository is {type, url} in most packages, a bare URL or "github:owner/repo" shorthand in others."""
    if raw is None:
        return DependencyRepository()
    if isinstance(raw, str):
        return DependencyRepository(url=raw)
    if isinstance(raw, dict):
        return DependencyRepository(
            type=_optional_string(raw, "type", package_name),
            url=_optional_string(raw, "url", package_name),
        )
    raise ResolutionError(f"Unexpected {type(raw).__name__} for 'repository' in npm metadata of {package_name}")


def _promote_license(raw: Any, package_name: str) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    # Older packages use {"type": "MIT", "url": "..."}
    if isinstance(raw, dict):
        return _optional_string(raw, "type", package_name)
    raise ResolutionError(f"Unexpected {type(raw).__name__} for 'license' in npm metadata of {package_name}")


class NpmRegistryResolver:
    """
    Resolver reading package documents from the npm registry.

    The registry document is not uniformly typed across packages, so it is
    decoded permissively first and then promoted field by field: string
    ``author`` values become the author name and string ``repository``
    values become the repository URL. Any other shape mismatch fails the
    dependency.

    Priority: 10 (native source)
    Supports: npm dependencies
    """

    def __init__(self, registry_url: str = NPM_REGISTRY_URL, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "registry.npmjs.org"

    @property
    def priority(self) -> int:
        return 10

    def supports(self, dependency: Dependency) -> bool:
        return dependency.ecosystem == Ecosystem.NPM

    def resolve(self, dependency: Dependency, session: requests.Session) -> Dependency:
        """
        Fetch the package document and fill in the dependency metadata.

        Args:
            dependency: npm dependency
            session: requests.Session with configured headers

        Returns:
            Dependency with description, author, license, repository and
            homepage from the registry

        Raises:
            ResolutionError: On transport errors, non-2xx responses or
                undecodable documents
        """
        url = f"{self.registry_url}/{dependency.name}"
        logger.debug(f"Fetching npm metadata for: {dependency.name}")

        try:
            response = session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise ResolutionError(f"Timeout fetching npm metadata for {dependency.name}")
        except requests.exceptions.RequestException as e:
            raise ResolutionError(f"Error fetching npm metadata for {dependency.name}: {e}")

        if not 200 <= response.status_code < 300:
            raise ResolutionError(f"npm registry returned HTTP {response.status_code} for {dependency.name}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ResolutionError(f"JSON decode error for npm package {dependency.name}: {e}")

        if not isinstance(data, dict):
            raise ResolutionError(f"npm metadata for {dependency.name} is not an object")

        return self._normalize_response(dependency, data)

    def _normalize_response(self, dependency: Dependency, data: Dict[str, Any]) -> Dependency:
        package_name = dependency.name

        resolved = replace(
            dependency,
            full_name=_optional_string(data, "name", package_name) or dependency.full_name,
            description=_optional_string(data, "description", package_name),
            author=_promote_author(data.get("author"), package_name),
            license=_promote_license(data.get("license"), package_name),
            repository=_promote_repository(data.get("repository"), package_name),
            homepage=_optional_string(data, "homepage", package_name),
        )

        logger.debug(f"Successfully fetched npm metadata for: {package_name}")
        return resolved
