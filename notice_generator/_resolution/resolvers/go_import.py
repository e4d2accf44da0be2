"""Go module path resolution through go-import discovery.

A Go module path is not necessarily a repository URL. Hosts announce the
repository behind a path with an HTML meta tag served for ``?go-get=1``:

    <meta name="go-import" content="gopkg.in/yaml.v3 git https://gopkg.in/yaml.v3">

See https://go.dev/ref/mod#vcs-find for the convention.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import List, Optional, Tuple

import requests

from ...http_client import DEFAULT_TIMEOUT, http_get_text
from ...logging_config import logger
from ...models import Dependency, DependencyRepository, Ecosystem, GoImport

_GO_IMPORT_CONTENT = r"""["'](?P<import_prefix>\S+)\s+(?P<vcs>\S+)\s+(?P<repo_root>\S+)["']"""

GO_IMPORT_PATTERNS = [
    re.compile(
        r"""<\s*meta\s+name\s*=\s*["']go-import["']\s+content\s*=\s*""" + _GO_IMPORT_CONTENT + r"\s*/?>",
        re.IGNORECASE,
    ),
    # sourcehut and others emit the attributes the other way round
    re.compile(
        r"""<\s*meta\s+content\s*=\s*""" + _GO_IMPORT_CONTENT + r"""\s+name\s*=\s*["']go-import["']\s*/?>""",
        re.IGNORECASE,
    ),
]

# Module root is host/owner/repo on the big code hosts
MODULE_ROOT_SEGMENTS = 3

GOOGLESOURCE_PREFIX = "https://go.googlesource.com/"
GOLANG_GITHUB_ORG = "https://github.com/golang"
VERSIONED_IMPORT_PREFIX = "gopkg.in"


def parse_go_import(html: str) -> Optional[GoImport]:
    """
    Find the go-import meta tag in an HTML document.

    Args:
        html: Body of a ``?go-get=1`` response

    Returns:
        The first go-import tag found, or None
    """
    for pattern in GO_IMPORT_PATTERNS:
        match = pattern.search(html)
        if match:
            return GoImport(
                import_prefix=match.group("import_prefix"),
                vcs=match.group("vcs"),
                repo_root=match.group("repo_root"),
            )
    return None


def canonical_name_and_repository(go_import: GoImport) -> Tuple[str, str]:
    """
    Derive the display name and repository URL for a discovered module.

    The display name is the last two segments of the import prefix. Modules
    served from go.googlesource.com are pointed at their GitHub mirror under
    the golang organisation, and gopkg.in versioned imports at the
    conventional ``go-<pkg>/<pkg>`` GitHub repository.

    Examples:
        golang.org/x/mod, https://go.googlesource.com/mod -> ("x/mod", "https://github.com/golang/mod")
        gopkg.in/yaml.v3 -> ("go-yaml/yaml", "https://github.com/go-yaml/yaml")

    Args:
        go_import: Parsed go-import tag

    Returns:
        (display name, repository URL)
    """
    segments = go_import.import_prefix.split("/")
    name = "/".join(segments[-2:]) if len(segments) >= 2 else go_import.import_prefix
    repo_root = go_import.repo_root

    if repo_root.startswith(GOOGLESOURCE_PREFIX):
        repo_root = f"{GOLANG_GITHUB_ORG}/{repo_root.rstrip('/').split('/')[-1]}"
    elif name.startswith(VERSIONED_IMPORT_PREFIX) and "/" in name:
        package_root = name.split("/")[1].split(".")[0]
        name = f"go-{package_root}/{package_root}"
        repo_root = f"https://github.com/{name}"

    return name, repo_root


class GoImportResolver:
    """
    Resolves Go module paths to repositories with go-import discovery.

    Each module path is fetched as ``https://<path>?go-get=1``. When that
    fails or carries no go-import tag and the path is deeper than
    ``host/owner/repo``, the module root is tried instead.
    """

    name = "go-import"

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def _discover(self, module_path: str, session: requests.Session) -> Optional[GoImport]:
        try:
            html = http_get_text(session, f"https://{module_path}?go-get=1", timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug(f"go-import discovery failed for {module_path}: {e}")
            return None
        return parse_go_import(html)

    def resolve(self, dependency: Dependency, session: requests.Session) -> Optional[Dependency]:
        """
        Resolve one module requirement.

        Args:
            dependency: Unresolved module dependency (module path in ``full_name``)
            session: requests.Session with the default User-Agent

        Returns:
            Dependency with display name and repository, or None when the
            module could not be discovered
        """
        module_path = dependency.full_name or dependency.name
        go_import = self._discover(module_path, session)

        if go_import is None:
            segments = module_path.split("/")
            if len(segments) > MODULE_ROOT_SEGMENTS:
                module_root = "/".join(segments[:MODULE_ROOT_SEGMENTS])
                logger.debug(f"Retrying go-import discovery for {module_path} at module root {module_root}")
                go_import = self._discover(module_root, session)

        if go_import is None:
            logger.warning(f"unrecognised import {module_path!r} (no go-import meta tags)")
            return None

        name, repo_root = canonical_name_and_repository(go_import)
        logger.debug(f"Resolved {module_path} to {name} ({go_import.vcs} {repo_root})")
        return replace(
            dependency,
            name=name,
            full_name=go_import.import_prefix,
            repository=DependencyRepository(type=go_import.vcs, url=repo_root),
            ecosystem=Ecosystem.GO_MODULE,
        )

    def needs_resolution(self, dependency: Dependency) -> bool:
        """Module requirements come out of the scanner without a repository."""
        return dependency.ecosystem == Ecosystem.GO_MODULE and not dependency.repository.url

    def resolve_all(
        self,
        dependencies: List[Dependency],
        session: requests.Session,
        max_workers: int = 8,
    ) -> List[Dependency]:
        """
        Resolve every unresolved module requirement concurrently.

        Each requirement is resolved by its own task, which returns its own
        result; results are collected in input order. Requirements that cannot
        be discovered are dropped, other dependencies pass through untouched.

        Args:
            dependencies: Dependencies from the manifest scanners
            session: requests.Session with the default User-Agent
            max_workers: Upper bound on concurrent discovery requests

        Returns:
            Resolved dependencies, in input order
        """
        pending = [d for d in dependencies if self.needs_resolution(d)]
        if not pending:
            return list(dependencies)

        logger.info(f"Discovering repositories for {len(pending)} Go modules")
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="go-import") as executor:
            futures = [executor.submit(self.resolve, d, session) for d in pending]

        outcomes: List[Optional[Dependency]] = []
        for dependency, future in zip(pending, futures):
            try:
                outcomes.append(future.result())
            except Exception as e:
                logger.error(f"Unexpected error resolving {dependency.full_name}: {e}")
                outcomes.append(None)

        remaining = iter(outcomes)
        resolved: List[Dependency] = []
        for dependency in dependencies:
            if not self.needs_resolution(dependency):
                resolved.append(dependency)
                continue
            outcome = next(remaining)
            if outcome is not None:
                resolved.append(outcome)

        logger.info(f"Resolved {sum(o is not None for o in outcomes)}/{len(pending)} Go modules")
        return resolved
