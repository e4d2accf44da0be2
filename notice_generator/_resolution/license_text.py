"""License text lookup on GitHub's raw content host."""

from typing import Optional

import requests

from ..http_client import DEFAULT_TIMEOUT, http_get_text
from ..logging_config import logger
from ..models import Dependency
from .utils import parse_github_repository

RAW_CONTENT_BASE = "https://raw.githubusercontent.com"

# Probed in order, first hit wins
LICENSE_FILE_CANDIDATES = ("LICENSE.txt", "LICENSE.md", "LICENSE")


def license_source_url(dependency: Dependency) -> Optional[str]:
    """Homepage when it is on GitHub, otherwise the repository URL."""
    if dependency.homepage and "github.com" in dependency.homepage:
        return dependency.homepage
    return dependency.repository.url or None


class LicenseTextFetcher:
    """
    Best-effort download of a dependency's license file.

    Looks for ``LICENSE.txt``, ``LICENSE.md`` and ``LICENSE`` on the default
    branch (``HEAD``) of the dependency's GitHub repository. Never raises:
    an empty string means no license file was found.
    """

    def __init__(self, raw_base_url: str = RAW_CONTENT_BASE, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.raw_base_url = raw_base_url.rstrip("/")
        self.timeout = timeout

    def fetch(self, dependency: Dependency, session: requests.Session) -> str:
        """
        Fetch the license text for a dependency.

        Args:
            dependency: Resolved dependency
            session: requests.Session with the default User-Agent

        Returns:
            License file content, or an empty string
        """
        parsed = parse_github_repository(license_source_url(dependency))
        if parsed is None:
            logger.debug(f"No GitHub location to look up the license of {dependency.name}")
            return ""

        owner, repo = parsed
        for file_name in LICENSE_FILE_CANDIDATES:
            url = f"{self.raw_base_url}/{owner}/{repo}/HEAD/{file_name}"
            try:
                return http_get_text(session, url, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                logger.debug(f"No license at {url}: {e}")

        logger.info(f"No license file found for {dependency.name} in {owner}/{repo}")
        return ""
