"""ManifestScanner protocol for dependency manifest plugins."""

from pathlib import Path
from typing import List, Protocol

from ..config import NoticeConfig
from ..models import Dependency, Ecosystem


class ManifestScanner(Protocol):
    """
    Protocol defining the interface for manifest scanner plugins.

    Each scanner reads one manifest format and returns the direct
    dependencies it declares. Scanners are registered with ScannerRegistry
    and selected by manifest filename.

    Example:
        class PackageJSONScanner:
            name = "package.json"
            supported_files = ("package.json",)
            ecosystem = Ecosystem.NPM

            def supports(self, manifest_path: Path) -> bool:
                return manifest_path.name in self.supported_files

            def scan(self, manifest_path: Path, config: NoticeConfig) -> List[Dependency]:
                # Parse package.json and return one Dependency per package name
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this scanner, used for logging."""
        ...

    @property
    def supported_files(self) -> tuple[str, ...]:
        """Manifest file names this scanner handles (not paths)."""
        ...

    @property
    def ecosystem(self) -> Ecosystem:
        """Ecosystem assigned to every dependency this scanner returns."""
        ...

    def supports(self, manifest_path: Path) -> bool:
        """
        Check if this scanner can read the given manifest.

        Args:
            manifest_path: Path to the manifest file

        Returns:
            True if this scanner handles the manifest format
        """
        ...

    def scan(self, manifest_path: Path, config: NoticeConfig) -> List[Dependency]:
        """
        Read the direct dependencies declared in a manifest.

        Implementations must not swallow read or parse errors: a manifest
        that cannot be read or parsed aborts the run.

        Args:
            manifest_path: Path to the manifest file
            config: Run configuration

        Returns:
            Dependencies in declaration order

        Raises:
            ManifestError: If the manifest cannot be read or parsed
        """
        ...
