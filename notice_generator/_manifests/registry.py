"""Scanner registry for managing manifest scanner plugins."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..logging_config import logger
from .protocol import ManifestScanner


class ScannerRegistry:
    """
    Registry for managing and querying manifest scanners.

    Example:
        registry = ScannerRegistry()
        registry.register(GoModScanner())
        registry.register(PackageJSONScanner())

        scanner = registry.get_scanner(Path("web/package.json"))
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._scanners: List[ManifestScanner] = []

    def register(self, scanner: ManifestScanner) -> None:
        """
        Register a manifest scanner.

        Args:
            scanner: ManifestScanner implementation to register
        """
        self._scanners.append(scanner)
        logger.debug(f"Registered manifest scanner: {scanner.name}")

    def get_scanner(self, manifest_path: Path) -> Optional[ManifestScanner]:
        """
        Get the first registered scanner supporting a manifest.

        Args:
            manifest_path: Path to the manifest file

        Returns:
            Matching scanner, or None when the format is unknown
        """
        for scanner in self._scanners:
            if scanner.supports(manifest_path):
                return scanner
        return None

    def list_scanners(self) -> List[Dict[str, Any]]:
        """
        List all registered scanners.

        Returns:
            List of dicts with 'name', 'files' and 'ecosystem' keys
        """
        return [
            {"name": s.name, "files": list(s.supported_files), "ecosystem": s.ecosystem.value} for s in self._scanners
        ]
