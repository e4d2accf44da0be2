"""Notice fragments: cache, rendering and assembly of the NOTICE document.

The NOTICE document has a small line grammar that must survive a round trip
through the cache:

    Title

    Copyright

    NOTICES:
    --------

    Description

    --------

    ## left-pad

    This product contains 'left-pad' by azer.
    ...
    ---

    ## lodash
    ...

A line starting with ``## `` opens the section of the dependency named by
the rest of the line, a line starting with ``---`` closes it.
"""

import os
import shutil
from pathlib import Path
from typing import List

from .config import NoticeConfig
from .exceptions import FileProcessingError
from .logging_config import logger
from .models import Dependency
from .sanitization import generate_file_name

HEADING_MARKER = "## "
SEPARATOR_MARKER = "---"
BANNER_RULE = "--------"


def render_fragment(dependency: Dependency, license_text: str = "") -> str:
    """
    Render the notice fragment of a dependency.

    Args:
        dependency: Resolved dependency
        license_text: License file content, possibly empty

    Returns:
        Fragment text, ending with a blank line
    """
    parts = [f"{HEADING_MARKER}{dependency.name}\n\n"]

    if dependency.author.name:
        parts.append(f"This product contains '{dependency.name}' by {dependency.author.name}.\n\n")
    else:
        parts.append(f"This product contains '{dependency.name}'.\n\n")
    if dependency.description:
        parts.append(f"{dependency.description}\n\n")
    if dependency.homepage:
        parts.append(f"* HOMEPAGE:\n  * {dependency.homepage}\n\n")
    if dependency.license:
        parts.append(f"* LICENSE: {dependency.license}\n\n")
    parts.append(f"{license_text}\n\n")

    return "".join(parts)


def render_header(config: NoticeConfig) -> str:
    """Render the document header that precedes the fragments."""
    return (
        f"{config.title}\n\n"
        f"{config.copyright}\n\n"
        f"NOTICES:\n{BANNER_RULE}\n\n"
        f"{config.description}\n\n"
        f"{BANNER_RULE}\n\n"
    )


def _ensure_blank_line_ending(text: str) -> str:
    if not text:
        return text
    if text.endswith("\n\n"):
        return text
    if text.endswith("\n"):
        return text + "\n"
    return text + "\n\n"


class NoticeCache:
    """
    Per-dependency fragment files for one repository.

    ``cache_dir`` holds the fragments split from the previous NOTICE
    document; ``work_dir`` holds the fragments of the current run. A fragment
    moved from the cache into the working directory is reused as-is, which
    skips every network lookup for that dependency.
    """

    def __init__(self, cache_dir: Path, work_dir: Path) -> None:
        self.cache_dir = Path(cache_dir)
        self.work_dir = Path(work_dir)

    @classmethod
    def for_config(cls, config: NoticeConfig) -> "NoticeCache":
        return cls(config.notice_dir_path, config.notice_work_path)

    def prepare(self) -> None:
        """
        Create the cache directory and an empty working directory.

        Raises:
            FileProcessingError: If either directory cannot be created
        """
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            if self.work_dir.exists():
                shutil.rmtree(self.work_dir)
            self.work_dir.mkdir(parents=True)
        except OSError as e:
            raise FileProcessingError(f"Cannot create notice directories: {e}")

    def split(self, document_path: Path) -> List[str]:
        """
        Split a NOTICE document into cached fragments.

        Each section becomes ``cache_dir/<sanitized name>``, heading line
        included. Lines outside any section (the header) are dropped. A
        missing document is not an error.

        Args:
            document_path: Path of the previous NOTICE document

        Returns:
            Section names found, in document order

        Raises:
            OSError: If the document or a fragment file cannot be read or written
        """
        document_path = Path(document_path)
        if not document_path.is_file():
            logger.info(f"No existing notice at {document_path}, every dependency will be resolved")
            return []

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        names: List[str] = []
        out = None
        try:
            with open(document_path, "r", encoding="utf-8", errors="replace") as document:
                for raw_line in document:
                    line = raw_line.rstrip("\r\n")

                    if line.startswith(HEADING_MARKER):
                        if out is not None:
                            out.close()
                        name = line[len(HEADING_MARKER) :]
                        logger.debug(f"Found {name} in existing notice")
                        names.append(name)
                        out = open(self.cache_dir / generate_file_name(name), "w", encoding="utf-8")

                    if out is None:
                        continue
                    if line.startswith(SEPARATOR_MARKER):
                        out.close()
                        out = None
                    else:
                        out.write(line + "\n")
        finally:
            if out is not None:
                out.close()

        logger.info(f"Split {len(names)} fragments from {document_path}")
        return names

    def restore(self, dependency: Dependency) -> bool:
        """
        Move a dependency's cached fragment into the working directory.

        Args:
            dependency: Dependency to restore

        Returns:
            True when a cached fragment was reused
        """
        try:
            os.rename(self.cache_dir / dependency.file_name, self.fragment_path(dependency))
        except FileNotFoundError:
            return False
        return True

    def fragment_path(self, dependency: Dependency) -> Path:
        return self.work_dir / dependency.file_name

    def write_fragment(self, dependency: Dependency, license_text: str = "") -> Path:
        """
        Write a freshly rendered fragment into the working directory.

        Args:
            dependency: Resolved dependency
            license_text: License file content, possibly empty

        Returns:
            Path of the written fragment
        """
        path = self.fragment_path(dependency)
        path.write_text(render_fragment(dependency, license_text), encoding="utf-8")
        return path

    def read_fragment(self, dependency: Dependency) -> str:
        """Read a dependency's fragment; a missing fragment reads as empty."""
        try:
            return self.fragment_path(dependency).read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(f"No notice fragment for {dependency.name}")
            return ""


def assemble_notice(config: NoticeConfig, dependencies: List[Dependency], cache: NoticeCache) -> str:
    """
    Assemble the NOTICE document from the working-directory fragments.

    Fragments are ordered by dependency name and separated by a ``---`` line
    with a blank line on each side.

    Args:
        config: Run configuration (title, copyright, description)
        dependencies: Every dependency of the run
        cache: Cache holding the fragments

    Returns:
        Complete document text
    """
    fragments = []
    for dependency in sorted(dependencies, key=lambda d: d.name):
        fragment = _ensure_blank_line_ending(cache.read_fragment(dependency))
        if fragment:
            fragments.append(fragment)

    return render_header(config) + f"{SEPARATOR_MARKER}\n\n".join(fragments)


def write_notice(path: Path, text: str) -> None:
    """
    Overwrite the NOTICE document.

    Raises:
        FileProcessingError: If the document cannot be written
    """
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileProcessingError(f"Cannot write notice file {path}: {e}")
