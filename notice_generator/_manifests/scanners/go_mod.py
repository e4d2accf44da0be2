"""Scanner for go.mod module files."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ...config import NoticeConfig
from ...exceptions import ManifestError
from ...logging_config import logger
from ...models import Dependency, DependencyAuthor, DependencyRepository, Ecosystem


@dataclass(frozen=True)
class GoRequirement:
    """A single ``require`` entry of a go.mod file."""

    path: str
    version: str
    indirect: bool = False


def go_toolchain_dependency() -> Dependency:
    """The Go toolchain itself, listed in every Go project's notice."""
    return Dependency(
        name="Go",
        full_name="github.com/golang/go",
        description="The Go programming language",
        author=DependencyAuthor(name="The Go authors"),
        license="BSD-style",
        repository=DependencyRepository(type="git", url="github.com/golang/go"),
        homepage="https://go.dev/",
        ecosystem=Ecosystem.GO_MODULE,
    )


def _split_comment(line: str) -> tuple[str, Optional[str]]:
    """Split a go.mod line into its content and its ``//`` comment."""
    content, sep, comment = line.partition("//")
    return content.strip(), comment.strip() if sep else None


def _is_indirect(comment: Optional[str]) -> bool:
    # Same rule as golang.org/x/mod: "// indirect" or "// indirect; other notes"
    if comment is None:
        return False
    return comment.split(";", 1)[0].strip() == "indirect"


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ('"', "`"):
        return token[1:-1]
    return token


def _parse_requirement(content: str, comment: Optional[str], line_number: int, source: str) -> GoRequirement:
    tokens = content.split()
    if len(tokens) != 2:
        raise ManifestError(f"{source}:{line_number}: usage: require module/path v1.2.3")
    return GoRequirement(path=_unquote(tokens[0]), version=_unquote(tokens[1]), indirect=_is_indirect(comment))


def parse_go_mod(text: str, source: str = "go.mod") -> List[GoRequirement]:
    """
    Parse the ``require`` directives of a go.mod file.

    Handles single-line directives (``require path v1``) and factored blocks
    (``require ( ... )``). Other directives are read only as far as needed to
    skip their blocks.

    Args:
        text: Contents of the go.mod file
        source: Name used in error messages

    Returns:
        Every requirement, direct and indirect, in file order

    Raises:
        ManifestError: On malformed require entries or unterminated blocks
    """
    requirements: List[GoRequirement] = []
    block: Optional[str] = None
    block_start = 0

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        content, comment = _split_comment(raw_line)
        if not content:
            continue

        if block is not None:
            if content == ")":
                block = None
            elif block == "require":
                requirements.append(_parse_requirement(content, comment, line_number, source))
            continue

        if content.endswith("("):
            verb = content[:-1].strip()
            if not verb or len(verb.split()) != 1:
                raise ManifestError(f"{source}:{line_number}: unexpected token before '('")
            block = verb
            block_start = line_number
            continue

        parts = content.split(None, 1)
        if parts[0] == "require":
            rest = parts[1] if len(parts) > 1 else ""
            requirements.append(_parse_requirement(rest, comment, line_number, source))

    if block is not None:
        raise ManifestError(f"{source}:{block_start}: unterminated '{block} (' block")

    return requirements


class GoModScanner:
    """
    Scanner for go.mod files.

    Returns the Go toolchain plus one unresolved dependency per direct
    requirement. The module path is kept in ``full_name``; the vanity import
    resolver later turns it into a display name and repository URL.
    """

    name = "go.mod"
    supported_files = ("go.mod",)
    ecosystem = Ecosystem.GO_MODULE

    def supports(self, manifest_path: Path) -> bool:
        return manifest_path.name in self.supported_files

    def scan(self, manifest_path: Path, config: NoticeConfig) -> List[Dependency]:
        try:
            text = manifest_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Invalid go.mod file {manifest_path}: {e}")

        requirements = parse_go_mod(text, source=str(manifest_path))

        dependencies = [go_toolchain_dependency()]
        for requirement in requirements:
            if requirement.indirect:
                continue
            dependencies.append(
                Dependency(name=requirement.path, full_name=requirement.path, ecosystem=self.ecosystem)
            )

        logger.info(
            f"Found {len(dependencies) - 1} direct requirements in {manifest_path} "
            f"({len(requirements) - len(dependencies) + 1} indirect skipped)"
        )
        return dependencies
