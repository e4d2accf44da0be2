"""Dependency collection across all configured manifests."""

from typing import Dict, List, Optional

from ..config import NoticeConfig
from ..exceptions import ManifestError
from ..logging_config import logger
from ..models import Dependency, Ecosystem
from .registry import ScannerRegistry
from .scanners import GoModScanner, PackageJSONScanner, PipfileScanner


def create_default_registry() -> ScannerRegistry:
    """
    Create a ScannerRegistry with the built-in scanners.

    Returns:
        Registry with go.mod, package.json and Pipfile scanners
    """
    registry = ScannerRegistry()
    registry.register(GoModScanner())
    registry.register(PackageJSONScanner())
    registry.register(PipfileScanner())
    return registry


def filter_ignored(dependencies: List[Dependency], ignore: List[str]) -> List[Dependency]:
    """Remove dependencies whose name or full name is in the ignore list."""
    ignored = set(ignore)
    if not ignored:
        return dependencies

    kept = [d for d in dependencies if d.name not in ignored and d.full_name not in ignored]
    if len(kept) != len(dependencies):
        logger.info(f"Ignored {len(dependencies) - len(kept)} dependencies listed in ignoreDependencies")
    return kept


def deduplicate(dependencies: List[Dependency]) -> List[Dependency]:
    """
    Drop dependencies whose fragment filename is already taken.

    Repeated names (the same package declared by several manifests) are
    dropped silently. Distinct names that sanitize to the same filename
    would overwrite each other's fragment, so the later one is dropped
    with a warning.

    Args:
        dependencies: Dependencies in discovery order

    Returns:
        Dependencies with unique fragment filenames, first occurrence kept
    """
    seen: Dict[str, Dependency] = {}
    for dependency in dependencies:
        existing = seen.get(dependency.file_name)
        if existing is None:
            seen[dependency.file_name] = dependency
        elif existing.name != dependency.name:
            logger.warning(
                f"Dependency '{dependency.name}' collides with '{existing.name}' "
                f"(both stored as '{dependency.file_name}'), keeping '{existing.name}'"
            )
    return list(seen.values())


def collect_dependencies(config: NoticeConfig, registry: Optional[ScannerRegistry] = None) -> List[Dependency]:
    """
    Collect the direct dependencies declared by every configured manifest.

    Module requirements are returned unresolved (see
    ``GoImportResolver.resolve_all``). Names from ``additionalDependencies``
    are added as npm packages when a package.json is scanned. Names from
    ``ignoreDependencies`` are removed whether they match the display name or
    the full name.

    Args:
        config: Run configuration
        registry: Optional scanner registry, defaults to the built-in scanners

    Returns:
        Dependencies with unique fragment filenames

    Raises:
        ManifestError: If a manifest is missing, unreadable or unparsable, or
            no scanner understands it
    """
    registry = registry or create_default_registry()
    logger.debug(f"Manifest scanners: {[s['name'] for s in registry.list_scanners()]}")
    dependencies: List[Dependency] = []
    has_package_manifest = False

    for manifest_path in config.manifest_paths():
        scanner = registry.get_scanner(manifest_path)
        if scanner is None:
            raise ManifestError(f"No scanner available for manifest {manifest_path}")
        if not manifest_path.is_file():
            raise ManifestError(f"Manifest {manifest_path} does not exist")

        logger.info(f"Scanning {manifest_path} with {scanner.name} scanner")
        dependencies.extend(scanner.scan(manifest_path, config))
        has_package_manifest = has_package_manifest or scanner.ecosystem == Ecosystem.NPM

    if has_package_manifest:
        known_names = {dependency.name for dependency in dependencies}
        for name in config.additional_dependencies:
            if name not in known_names:
                dependencies.append(Dependency(name=name, ecosystem=Ecosystem.NPM))
                known_names.add(name)
    elif config.additional_dependencies:
        logger.warning("additionalDependencies are only added to projects with a package.json manifest")

    return deduplicate(filter_ignored(dependencies, config.ignore_dependencies))
