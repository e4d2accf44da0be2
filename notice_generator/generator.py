"""NOTICE generation orchestrator.

Example usage:
    from notice_generator.config import load_config
    from notice_generator.generator import NoticeGenerator

    config = load_config("notice.yaml", repository_path=".")
    with NoticeGenerator(config) as generator:
        result = generator.run()
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

import requests

from ._manifests import collect_dependencies, deduplicate, filter_ignored
from ._resolution import GoImportResolver, LicenseTextFetcher, ResolverRegistry, create_default_registry
from .config import NoticeConfig
from .exceptions import ResolutionError
from .http_client import create_session
from .logging_config import logger
from .models import Dependency, GenerationResult
from .notice import NoticeCache, assemble_notice, write_notice

REUSED = "reused"
GENERATED = "generated"
FAILED = "failed"


@dataclass
class _TaskOutcome:
    dependency: Dependency
    status: str


class NoticeGenerator:
    """
    Generates the NOTICE document of a repository.

    Fragments of dependencies already listed in the previous NOTICE document
    are reused without any network access; every other dependency is
    resolved, gets its license text looked up and a fresh fragment written.
    """

    def __init__(
        self,
        config: NoticeConfig,
        registry: Optional[ResolverRegistry] = None,
        session: Optional[requests.Session] = None,
        license_fetcher: Optional[LicenseTextFetcher] = None,
        import_resolver: Optional[GoImportResolver] = None,
    ) -> None:
        self.config = config
        self.registry = registry or create_default_registry(config.github_token)
        self.license_fetcher = license_fetcher or LicenseTextFetcher()
        self.import_resolver = import_resolver or GoImportResolver()
        self.cache = NoticeCache.for_config(config)

        self._owns_session = session is None
        self.session = session or create_session(pool_size=config.max_workers)

    def __enter__(self) -> "NoticeGenerator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this generator created it."""
        if self._owns_session:
            self.session.close()

    def discover(self) -> List[Dependency]:
        """
        Collect dependencies from the manifests and resolve module paths.

        Ignore rules and filename collisions are applied again after module
        resolution, since it replaces module paths with display names.
        """
        dependencies = collect_dependencies(self.config)
        dependencies = self.import_resolver.resolve_all(dependencies, self.session, self.config.max_workers)
        return deduplicate(filter_ignored(dependencies, self.config.ignore_dependencies))

    def process(self, dependency: Dependency) -> _TaskOutcome:
        """
        Produce the working-directory fragment of one dependency.

        Args:
            dependency: Dependency to process

        Returns:
            Outcome with the dependency as written and how it was produced
        """
        if self.cache.restore(dependency):
            logger.debug(f"Reusing notice fragment for {dependency.name}")
            return _TaskOutcome(dependency, REUSED)

        status = GENERATED
        license_text = ""
        try:
            dependency = self.registry.resolve(dependency, self.session)
            license_text = self.license_fetcher.fetch(dependency, self.session)
        except ResolutionError as e:
            logger.warning(f"Failed to resolve {dependency.name}: {e}")
            status = FAILED
        except Exception as e:
            logger.error(f"Unexpected error resolving {dependency.name}: {e}")
            status = FAILED

        self.cache.write_fragment(dependency, license_text)
        return _TaskOutcome(dependency, status)

    def _write_bare_fragment(self, dependency: Dependency) -> None:
        # Known fields only, so the dependency still has a section
        try:
            self.cache.write_fragment(dependency)
        except OSError as e:
            logger.error(f"Cannot write notice fragment for {dependency.name}: {e}")

    def run(self) -> GenerationResult:
        """
        Generate and write the NOTICE document.

        Returns:
            GenerationResult describing the run

        Raises:
            FileProcessingError: If the notice directories or document cannot be written
            ManifestError: If a manifest cannot be scanned
        """
        logger.debug(f"Metadata resolvers: {self.registry.list_resolvers()}")
        self.cache.prepare()
        try:
            self.cache.split(self.config.notice_file_path)
        except (OSError, ValueError) as e:
            logger.error(f"Cannot split existing notice {self.config.notice_file_path}: {e}")

        dependencies = self.discover()
        logger.info(f"Processing {len(dependencies)} dependencies with {self.config.max_workers} workers")

        result = GenerationResult(output_path=self.config.notice_file_path)
        with ThreadPoolExecutor(max_workers=self.config.max_workers, thread_name_prefix="notice") as executor:
            futures = [executor.submit(self.process, d) for d in dependencies]

        written: List[Dependency] = []
        for dependency, future in zip(dependencies, futures):
            try:
                outcome = future.result()
            except Exception as e:
                logger.error(f"Unexpected error processing {dependency.name}: {e}")
                self._write_bare_fragment(dependency)
                written.append(dependency)
                result.failed.append(dependency.name)
                continue

            written.append(outcome.dependency)
            if outcome.status == REUSED:
                result.reused.append(dependency.name)
            elif outcome.status == GENERATED:
                result.generated.append(dependency.name)
            else:
                result.failed.append(dependency.name)

        result.dependencies = sorted(written, key=lambda d: d.name)
        write_notice(self.config.notice_file_path, assemble_notice(self.config, result.dependencies, self.cache))

        logger.info(
            f"Wrote {self.config.notice_file_path}: {result.total} dependencies "
            f"({len(result.reused)} reused, {len(result.generated)} generated, {len(result.failed)} failed)"
        )
        return result
