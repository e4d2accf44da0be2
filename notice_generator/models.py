"""Data models shared by scanners, resolvers and the notice writer."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

from .sanitization import generate_file_name


class Ecosystem(Enum):
    """Dependency ecosystem, selects how a dependency gets resolved."""

    GO_MODULE = "go"
    NPM = "npm"
    PIPFILE = "pipfile"


@dataclass
class DependencyAuthor:
    """Author of a dependency."""

    name: str = ""
    email: str = ""


@dataclass
class DependencyRepository:
    """Version control location of a dependency."""

    type: str = ""
    url: str = ""


@dataclass
class Dependency:
    """
    A third-party dependency listed in the NOTICE document.

    Attributes:
        name: Display name, also the key of the notice fragment
        full_name: Fully qualified identifier (module path, owner/repo)
        description: Short description
        author: Author or owning organisation
        license: Declared license name or SPDX identifier
        repository: Version control location
        homepage: Project homepage
        ecosystem: Ecosystem the dependency was discovered in
    """

    name: str
    full_name: str = ""
    description: str = ""
    author: DependencyAuthor = field(default_factory=DependencyAuthor)
    license: str = ""
    repository: DependencyRepository = field(default_factory=DependencyRepository)
    homepage: str = ""
    ecosystem: Ecosystem = Ecosystem.NPM

    @property
    def file_name(self) -> str:
        """Sanitized fragment filename for this dependency."""
        return generate_file_name(self.name)


@dataclass(frozen=True)
class GoImport:
    """Parsed ``<meta name="go-import">`` discovery tag."""

    import_prefix: str
    vcs: str
    repo_root: str


@dataclass
class GenerationResult:
    """
    Outcome of one notice generation run.

    Attributes:
        output_path: Path of the written NOTICE document
        dependencies: Dependencies included in the document, sorted by name
        reused: Names whose fragment came from the previous document
        generated: Names whose fragment was freshly generated
        failed: Names whose metadata resolution failed (fragment still written)
    """

    output_path: Path
    dependencies: List[Dependency] = field(default_factory=list)
    reused: List[str] = field(default_factory=list)
    generated: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.dependencies)
