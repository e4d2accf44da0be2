"""Dependency discovery from ecosystem manifests.

Supported manifests:
- Go: go.mod (direct requirements only, plus the Go toolchain)
- JavaScript: package.json (dependencies and devDependencies)
- Python: Pipfile (``# repo: https://github.com/...`` comments)

Example usage:
    from notice_generator._manifests import collect_dependencies

    dependencies = collect_dependencies(config)
"""

from .collector import collect_dependencies, create_default_registry, deduplicate, filter_ignored
from .protocol import ManifestScanner
from .registry import ScannerRegistry
from .scanners import GoModScanner, PackageJSONScanner, PipfileScanner, parse_go_mod

__all__ = [
    # Main API
    "collect_dependencies",
    "deduplicate",
    "filter_ignored",
    # Classes for advanced usage
    "ManifestScanner",
    "ScannerRegistry",
    "GoModScanner",
    "PackageJSONScanner",
    "PipfileScanner",
    "parse_go_mod",
    # Factory
    "create_default_registry",
]
