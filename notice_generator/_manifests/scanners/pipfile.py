"""Scanner for Pipfile manifests annotated with repository comments.

Python packages are matched to their source repository through comments
placed next to the package entry:

    [packages]
    # repo: https://github.com/psf/requests
    requests = "*"

Only GitHub repositories are recognised; package entries without a comment
are not listed in the notice.
"""

import re
from pathlib import Path
from typing import List

from ...config import NoticeConfig
from ...exceptions import ManifestError
from ...logging_config import logger
from ...models import Dependency, DependencyRepository, Ecosystem

REPOSITORY_COMMENT_PATTERN = re.compile(
    r"^#\s*[Rr]epo(?:sitory)?:\s*(?P<url>https://github\.com/(?P<full_name>[^/\s]+/(?P<name>[^/\s]+)))"
)


class PipfileScanner:
    """Scanner reading ``# repo: <url>`` comments from a Pipfile."""

    name = "Pipfile"
    supported_files = ("Pipfile",)
    ecosystem = Ecosystem.PIPFILE

    def supports(self, manifest_path: Path) -> bool:
        return manifest_path.name in self.supported_files

    def scan(self, manifest_path: Path, config: NoticeConfig) -> List[Dependency]:
        try:
            lines = manifest_path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Invalid pipfile {manifest_path}: {e}")

        dependencies: List[Dependency] = []
        for line in lines:
            match = REPOSITORY_COMMENT_PATTERN.match(line.strip())
            if not match:
                continue
            dependencies.append(
                Dependency(
                    name=match.group("name"),
                    full_name=match.group("full_name"),
                    repository=DependencyRepository(type="https", url=match.group("url")),
                    ecosystem=self.ecosystem,
                )
            )

        logger.info(f"Found {len(dependencies)} annotated packages in {manifest_path}")
        return dependencies
