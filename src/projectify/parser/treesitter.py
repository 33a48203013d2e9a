"""Tree-sitter parser for extracting import and definition facts from source files."""

import logging
from pathlib import Path

from tree_sitter import Node, Parser, Query, QueryCursor

from .facts import FileFacts
from .languages import (
    LANGUAGE_CONFIGS,
    get_language_config,
    get_language_for_file,
    get_language_tag,
)

logger = logging.getLogger(__name__)

REQUIRE_FUNCTION = "require"


class TreeSitterParser:
    """Parser for extracting file facts using Tree-sitter."""

    def __init__(self):
        """Initialize parsers and pre-compile queries for all languages."""
        self._parsers: dict[str, Parser] = {}
        self._queries: dict[str, dict[str, Query]] = {}
        self._init_parsers()

    def _init_parsers(self) -> None:
        """Initialize Tree-sitter parsers and queries for all languages."""
        for lang_name, config in LANGUAGE_CONFIGS.items():
            self._parsers[lang_name] = Parser(config.language)
            self._queries[lang_name] = {
                "import": Query(config.language, config.import_query),
                "function": Query(config.language, config.function_query),
                "class": Query(config.language, config.class_query),
                "export": Query(config.language, config.export_query),
            }

    def _run_query(self, query: Query, node: Node) -> dict[str, list[Node]]:
        """Run a query and return captures as a dictionary.

        Args:
            query: The compiled query
            node: The root node to search

        Returns:
            Dictionary mapping capture names to lists of matching nodes
        """
        cursor = QueryCursor(query)
        return cursor.captures(node)

    def parse_source(self, source: str | bytes, file_path: Path | str) -> FileFacts:
        """Extract facts from already loaded source text.

        Files in languages without a parser get a facts record carrying only
        the language tag and size. Parser failures are logged and produce an
        empty record rather than an exception.

        Args:
            source: File contents
            file_path: Path of the file (used for language detection and as id)

        Returns:
            FileFacts for the file
        """
        path_str = str(file_path)
        text = source.decode("utf-8", errors="replace") if isinstance(source, bytes) else source
        source_bytes = source if isinstance(source, bytes) else source.encode("utf-8")

        facts = FileFacts(path=path_str, language=get_language_tag(file_path), size=len(text))

        language = get_language_for_file(file_path)
        if not language or not get_language_config(language):
            return facts

        try:
            tree = self._parsers[language].parse(source_bytes)
            root = tree.root_node
            facts.imports = self._extract_imports(root, source_bytes, language)
            facts.functions = self._extract_names(root, source_bytes, language, "function")
            facts.classes = self._extract_names(root, source_bytes, language, "class")
            facts.exports = self._extract_names(root, source_bytes, language, "export")
        except Exception as e:
            logger.warning(f"Parser warning in {Path(path_str).name}: {e}")
            return FileFacts(path=path_str, language=facts.language, size=facts.size)

        return facts

    def _extract_imports(self, root: Node, source: bytes, language: str) -> list[str]:
        """Extract raw import strings in source order, without duplicates."""
        captures = self._run_query(self._queries[language]["import"], root)

        nodes: list[Node] = []
        for key in ("import.name", "import.module", "import.source"):
            nodes.extend(captures.get(key, []))
        nodes.extend(
            node for node in captures.get("import.require", []) if self._is_require_argument(node, source)
        )
        nodes.sort(key=lambda node: node.start_byte)

        imports: list[str] = []
        seen: set[str] = set()
        for node in nodes:
            import_text = self._node_text(node, source).strip("'\"")
            if import_text and import_text not in seen:
                seen.add(import_text)
                imports.append(import_text)
        return imports

    def _is_require_argument(self, node: Node, source: bytes) -> bool:
        """Check that a string argument belongs to a ``require(...)`` call."""
        arguments = node.parent
        call = arguments.parent if arguments is not None else None
        if call is None:
            return False
        function = call.child_by_field_name("function")
        return self._node_text(function, source) == REQUIRE_FUNCTION

    def _extract_names(self, root: Node, source: bytes, language: str, kind: str) -> list[str]:
        """Extract defined names for a query kind ("function", "class" or "export")."""
        captures = self._run_query(self._queries[language][kind], root)
        nodes = sorted(captures.get(f"{kind}.name", []), key=lambda node: node.start_byte)

        names: list[str] = []
        for node in nodes:
            name = self._node_text(node, source)
            if name and name not in names:
                names.append(name)
        return names

    def _node_text(self, node: Node | None, source: bytes) -> str:
        """Get the text content of a node."""
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
