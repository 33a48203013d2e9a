"""Import resolver for mapping raw import strings to known files."""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Suffixes tried, in order, for every candidate path
CANDIDATE_SUFFIXES: tuple[str, ...] = ("", ".js", ".ts", ".jsx", ".tsx", ".py")

INDEX_BASENAME = "index"
PACKAGE_INIT = "__init__.py"

# Import strings with these prefixes are never treated as dotted modules
NON_MODULE_PREFIXES: tuple[str, ...] = (".", "/", "@")


@dataclass(frozen=True)
class ResolvedImport:
    """Result of resolving an import string."""

    original: str  # Import string exactly as written
    resolved_path: str | None  # Canonical path in the file set (None if unresolved)
    is_relative: bool  # True if resolved in relative mode

    @property
    def is_external(self) -> bool:
        """Unresolved imports are assumed to point outside the project."""
        return self.resolved_path is None


def canonical_path(path: str) -> str:
    """Normalize a path into the form used as a graph node id."""
    return os.path.normpath(path)


def python_relative_to_path(import_path: str) -> str:
    """Rewrite a Python relative module (``..pkg.mod``) into path form.

    One leading dot is the importing file's directory, each further dot
    moves one directory up. Strings that already contain a path separator
    (``./utils``, ``../lib``) are returned unchanged.

    Args:
        import_path: Import string starting with a dot

    Returns:
        Equivalent relative path (e.g. ``../pkg/mod``)
    """
    if "/" in import_path or "\\" in import_path:
        return import_path

    level = len(import_path) - len(import_path.lstrip("."))
    module_part = import_path[level:]

    prefix = "." if level == 1 else "/".join([".."] * (level - 1))
    if not module_part:
        return prefix
    return f"{prefix}/{module_part.replace('.', '/')}"


class ImportResolver:
    """Resolves import strings against a fixed set of known files.

    Two resolution modes are tried, chosen by the shape of the import:

    - Relative: the import starts with ``.``. Candidates are tried next to
      the importing file, as a file with one of the candidate suffixes, as
      an ``index`` file inside a directory, or as a Python package
      ``__init__.py``.
    - Dotted module: the import does not start with ``.``, ``/`` or ``@``.
      Dots become path separators and the same probing runs relative to
      the importing file's directory. There is no project-root or search
      path lookup.

    Anything that does not resolve is reported as unresolved; that is the
    normal outcome for third-party and standard library imports.
    """

    def __init__(self, known_files: Iterable[str] = ()):
        """Initialize the resolver.

        Args:
            known_files: Canonical paths of all files in the project
        """
        self.known_files: frozenset[str] = frozenset(known_files)

    def set_known_files(self, files: Iterable[str]) -> None:
        """Replace the set of known files.

        Args:
            files: Canonical paths of all files in the project
        """
        self.known_files = frozenset(files)

    def resolve(self, import_path: str, source_file: str) -> ResolvedImport:
        """Resolve an import written in ``source_file``.

        Args:
            import_path: Import string exactly as written (e.g. "./utils", "pkg.mod")
            source_file: Canonical path of the importing file

        Returns:
            ResolvedImport with the matching known file, or with
            ``resolved_path`` set to None
        """
        if not import_path:
            return ResolvedImport(original=import_path, resolved_path=None, is_relative=False)

        directory = os.path.dirname(source_file)

        if import_path.startswith("."):
            resolved_path = self._resolve_relative(import_path, directory)
            return ResolvedImport(original=import_path, resolved_path=resolved_path, is_relative=True)

        if not import_path.startswith(NON_MODULE_PREFIXES):
            resolved_path = self._resolve_dotted(import_path, directory)
            return ResolvedImport(original=import_path, resolved_path=resolved_path, is_relative=False)

        return ResolvedImport(original=import_path, resolved_path=None, is_relative=False)

    def resolve_path(self, import_path: str, source_file: str) -> str | None:
        """Resolve an import and return just the matching path (or None)."""
        return self.resolve(import_path, source_file).resolved_path

    def _resolve_relative(self, import_path: str, directory: str) -> str | None:
        """Resolve a path-relative import (``./x``, ``../x``, ``.x``)."""
        relative = python_relative_to_path(import_path)

        for suffix in CANDIDATE_SUFFIXES:
            found = self._find_file([
                os.path.join(directory, relative + suffix),
                os.path.join(directory, relative, INDEX_BASENAME + suffix),
                os.path.join(directory, relative, PACKAGE_INIT),
            ])
            if found:
                return found

        return None

    def _resolve_dotted(self, import_path: str, directory: str) -> str | None:
        """Resolve a dotted module import (``pkg.module``) next to the importer."""
        module_path = import_path.replace(".", "/")

        for suffix in CANDIDATE_SUFFIXES:
            found = self._find_file([
                os.path.join(directory, module_path + suffix),
                os.path.join(directory, module_path, PACKAGE_INIT),
            ])
            if found:
                return found

        return None

    def _find_file(self, possible_paths: list[str]) -> str | None:
        """Find the first known file from a list of possible paths.

        Args:
            possible_paths: Candidate paths, in priority order

        Returns:
            The first matching canonical path or None
        """
        for path in possible_paths:
            path = canonical_path(path)
            if path in self.known_files:
                return path
        return None
