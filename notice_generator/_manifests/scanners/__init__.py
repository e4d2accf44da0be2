"""Manifest scanner implementations."""

from .go_mod import GoModScanner, GoRequirement, go_toolchain_dependency, parse_go_mod
from .package_json import PackageJSONScanner
from .pipfile import PipfileScanner

__all__ = [
    "GoModScanner",
    "GoRequirement",
    "PackageJSONScanner",
    "PipfileScanner",
    "go_toolchain_dependency",
    "parse_go_mod",
]
