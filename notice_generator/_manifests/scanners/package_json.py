"""Scanner for package.json manifests (npm/Node.js format)."""

import json
from pathlib import Path
from typing import Any, Dict, List

from ...config import NoticeConfig
from ...exceptions import ManifestError
from ...logging_config import logger
from ...models import Dependency, Ecosystem


class PackageJSONScanner:
    """
    Scanner for package.json manifests.

    Only the package names are used: the keys of ``dependencies`` and, unless
    ``includeDevDependencies`` is switched off, ``devDependencies``. Version
    ranges are ignored because the registry lookup always reads the latest
    package document.
    """

    name = "package.json"
    supported_files = ("package.json",)
    ecosystem = Ecosystem.NPM

    def supports(self, manifest_path: Path) -> bool:
        return manifest_path.name in self.supported_files

    def _dependency_map(self, data: Dict[str, Any], key: str, manifest_path: Path) -> Dict[str, Any]:
        section = data.get(key) or {}
        if not isinstance(section, dict):
            raise ManifestError(f"{manifest_path}-Invalid package json: '{key}' must be an object")
        return section

    def scan(self, manifest_path: Path, config: NoticeConfig) -> List[Dependency]:
        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ManifestError(f"{manifest_path}-Invalid package json {e}")

        if not isinstance(data, dict):
            raise ManifestError(f"{manifest_path}-Invalid package json: top level must be an object")

        names = list(self._dependency_map(data, "dependencies", manifest_path))
        if config.include_dev_dependencies:
            names.extend(self._dependency_map(data, "devDependencies", manifest_path))

        # dict.fromkeys keeps first-seen order while dropping duplicates
        unique_names = list(dict.fromkeys(names))
        logger.info(f"Found {len(unique_names)} dependencies in {manifest_path}")
        return [Dependency(name=name, ecosystem=self.ecosystem) for name in unique_names]
