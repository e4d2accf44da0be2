"""GitHub resolver for dependencies hosted on github.com."""

import json
from dataclasses import replace
from typing import Any, Dict, Optional

import requests

from ...exceptions import ResolutionError
from ...http_client import DEFAULT_TIMEOUT, get_default_headers
from ...logging_config import logger
from ...models import Dependency, DependencyAuthor, Ecosystem
from ..utils import is_github_url, parse_github_repository

GITHUB_API_BASE = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github+json"


class GitHubResolver:
    """
    Resolver filling metadata from the GitHub repository and user APIs.

    Description, homepage (falling back to the repository page) and license
    come from ``GET /repos/{owner}/{repo}``; the author is the owner's profile
    name from ``GET /users/{login}``, or the login when the profile has none.

    The token, when given, is sent as a bearer token to the GitHub API only.
    Without a token the API allows 60 requests per hour.

    Priority: 20
    Supports: Go module and Pipfile dependencies whose repository is on GitHub
    """

    ecosystems = (Ecosystem.GO_MODULE, Ecosystem.PIPFILE)

    def __init__(
        self,
        token: Optional[str] = None,
        api_base_url: str = GITHUB_API_BASE,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.token = token
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "api.github.com"

    @property
    def priority(self) -> int:
        return 20

    def supports(self, dependency: Dependency) -> bool:
        return dependency.ecosystem in self.ecosystems and is_github_url(dependency.repository.url)

    def _get_json(self, session: requests.Session, path: str) -> Dict[str, Any]:
        url = f"{self.api_base_url}{path}"
        headers = get_default_headers(token=self.token, accept=GITHUB_ACCEPT)
        try:
            response = session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ResolutionError(f"Error calling GitHub API {path}: {e}")

        if response.status_code != 200:
            if response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
                raise ResolutionError(f"GitHub API rate limit exceeded calling {path}, provide a token")
            raise ResolutionError(f"GitHub API returned HTTP {response.status_code} for {path}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ResolutionError(f"JSON decode error for GitHub API {path}: {e}")
        if not isinstance(data, dict):
            raise ResolutionError(f"GitHub API {path} did not return an object")
        return data

    def _author_name(self, session: requests.Session, login: str) -> str:
        try:
            user = self._get_json(session, f"/users/{login}")
        except ResolutionError as e:
            logger.debug(f"Falling back to login for {login}: {e}")
            return login
        return user.get("name") or login

    def resolve(self, dependency: Dependency, session: requests.Session) -> Dependency:
        """
        Fill in metadata from GitHub.

        Args:
            dependency: Dependency with a GitHub repository URL
            session: requests.Session with configured headers

        Returns:
            Dependency with description, author, homepage and license

        Raises:
            ResolutionError: If the repository lookup fails
        """
        parsed = parse_github_repository(dependency.repository.url)
        if parsed is None:
            raise ResolutionError(f"Not a GitHub repository URL: {dependency.repository.url}")
        owner, repo = parsed

        logger.debug(f"Fetching GitHub metadata for: {owner}/{repo}")
        repo_info = self._get_json(session, f"/repos/{owner}/{repo}")

        author = dependency.author
        owner_info = repo_info.get("owner")
        login = owner_info.get("login") if isinstance(owner_info, dict) else None
        if login:
            author = DependencyAuthor(name=self._author_name(session, login))

        license_info = repo_info.get("license")
        if not isinstance(license_info, dict):
            license_info = {}

        return replace(
            dependency,
            description=repo_info.get("description") or dependency.description,
            author=author,
            homepage=repo_info.get("homepage") or repo_info.get("html_url") or dependency.homepage,
            license=license_info.get("name") or dependency.license,
        )
